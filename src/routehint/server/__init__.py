"""ASGI request pipeline, error mapping, and hint output backends."""
