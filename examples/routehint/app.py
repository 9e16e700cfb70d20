"""Route hints — watch unmatched requests get explained.

Every route here is reachable, and most requests you can think of are
not. Each miss prints one diff per route to the terminal; in debug mode
the 404 page shows the same diffs.

Try:
    curl localhost:8000/hello/world/mood          # missing {mood}
    curl -X POST localhost:8000/hello/world/mood/happy
    curl "localhost:8000/hello?flag=2&lalelu=1"   # flag=23 expected
    curl -H "Accept: text/html" localhost:8000/something.txt

Run:
    cd examples/routehint && python app.py
"""

from urllib.parse import parse_qs

from routehint import App, AppConfig, Request, Response, RouteHint

app = App(AppConfig(debug=True))
app.add_middleware(RouteHint())


@app.route("/hello/{name}/mood/{mood}")
def get_hello(name: str, mood: str):
    return f"Hello {mood} {name}!"


@app.route("/hello?flag=23&lalelu=1")
def get_hello_flag():
    return "Hello Flag!"


@app.route("/")
def get_index():
    return "Welcome Visitor!"


@app.route("/something.txt", format="text/plain")
def get_some_text():
    return Response("oh .. u r specific", content_type="text/plain; charset=utf-8")


@app.route("/guide/{_topic...}")
def get_guide(_topic: str):
    return "Welcome to the Guide!"


FORM_PAGE = """\
<!DOCTYPE html>
<html lang="en">
<head><title>Form</title></head>
<body>
  <form method="post">
    <input type="text" name="user_input">
    <button type="submit">submit</button>
  </form>
</body>
</html>
"""


@app.route("/form")
def get_form():
    return FORM_PAGE


@app.route("/form", methods=["POST"])
async def post_form(request: Request):
    fields = parse_qs(await request.text())
    values = fields.get("user_input", [])
    if not values or not values[0].isdigit():
        return ("user_input must be a number", 422)
    return f"UserInput {{ user_input: {int(values[0])} }}"


@app.route("/{path...}?{when}&{query...}")
def get_path_and_query(path: str, when: str, query: list[str]):
    return f"path: {path!r} query: {query!r} when: {when!r}"


if __name__ == "__main__":
    app.run()
