"""Hello World — the simplest waymark app.

Demonstrates placeholder and raw-regex routes, a multi-method route,
controller references, method override and a custom 404.

Run with any ASGI server, e.g.:
    uvicorn app:app
"""

from waymark import Router, RouterApp, get_response

router = Router()


class Notes:
    """Controller resolved from ``"Notes@member"`` references."""

    store: dict[str, str] = {}

    def show(self, note_id: str) -> None:
        get_response().write(Notes.store.get(note_id, ""))

    def save(self, note_id: str) -> None:
        Notes.store[note_id] = "saved"
        get_response().set_status(201)

    @staticmethod
    def remove(note_id: str) -> None:
        Notes.store.pop(note_id, None)
        get_response().set_status(204)


router.register_target("Notes", Notes)


@router.get("/")
def index():
    get_response().write("Hello, World!")


@router.get("/greet/{name}")
def greet(name: str):
    get_response().write(f"Hello, {name}!")


@router.get(r"/archive(/\d{4})?(/\d{2})?")
def archive(year, month):
    get_response().write(f"archive year={year} month={month}")


router.get("/notes/{id}", "Notes@show")
router.route("POST|PUT", "/notes/{id}", "Notes@save")
router.delete("/notes/{id}", "Notes@remove")


def not_found():
    response = get_response()
    response.set_status(404)
    response.write("Nothing here")


router.set_not_found(not_found)

app = RouterApp(router)
