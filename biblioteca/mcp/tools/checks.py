"""Walk every API endpoint once and report how each one answered."""

import logging
from dataclasses import asdict, dataclass, field

from biblioteca.database import MAX_ID
from biblioteca.mcp.client import BibliotecaClient

logger = logging.getLogger(__name__)


@dataclass
class CheckStep:
    name: str
    method: str
    path: str
    expected: int
    status: int | None = None
    passed: bool = False
    detail: str | None = None


@dataclass
class CheckReport:
    passed: int = 0
    failed: int = 0
    steps: list[CheckStep] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0


class _Runner:
    def __init__(self, client: BibliotecaClient, report: CheckReport) -> None:
        self.client = client
        self.report = report

    async def step(
        self,
        name: str,
        method: str,
        path: str,
        expected: int,
        json: dict | None = None,
    ) -> dict | list | None:
        step = CheckStep(name=name, method=method, path=path, expected=expected)
        self.report.steps.append(step)
        resp = await self.client.send(method, path, json=json)
        step.status = resp.status_code
        step.passed = resp.status_code == expected
        body = resp.json() if resp.content else None
        if step.passed:
            self.report.passed += 1
        else:
            self.report.failed += 1
            step.detail = str(body.get("detail") if isinstance(body, dict) else body)
            logger.warning("API check %r failed: %s %s -> %d", name, method, path, resp.status_code)
        return body if step.passed else None

    def skip(self, name: str, method: str, path: str, expected: int) -> None:
        self.report.steps.append(
            CheckStep(name=name, method=method, path=path, expected=expected, detail="skipped")
        )
        self.report.failed += 1


_AUTHOR_PATH = "/api/authors/{id}"
_BOOK_PATH = "/api/books/{id}"

_BOOK_STEPS = (
    ("show book", "GET", 200),
    ("update book", "PUT", 200),
    ("delete book", "DELETE", 204),
    ("deleted book is gone", "GET", 404),
)


async def run_api_checks(client: BibliotecaClient) -> CheckReport:
    """Create, read, update and delete one author and one book through the API.

    Every run reports the same steps in the same order. Steps that depend on
    an id whose creation failed are recorded as skipped and count as failures.
    """
    report = CheckReport()
    run = _Runner(client, report)
    book = None

    author = await run.step(
        "create author", "POST", "/api/authors", 201,
        json={"name": "API Check Author", "nationality": "Brazil"},
    )
    await run.step("list authors", "GET", "/api/authors", 200)
    await run.step("create author without name", "POST", "/api/authors", 422, json={})

    if author is None:
        run.skip("show author", "GET", _AUTHOR_PATH, 200)
        run.skip("update author", "PUT", _AUTHOR_PATH, 200)
        run.skip("create book", "POST", "/api/books", 201)
    else:
        author_path = _AUTHOR_PATH.format(id=author["id"])
        await run.step("show author", "GET", author_path, 200)
        await run.step("update author", "PUT", author_path, 200, json={"bio": "Updated by API check"})
        book = await run.step(
            "create book", "POST", "/api/books", 201,
            json={"title": "API Check Book", "author_id": author["id"]},
        )

    await run.step(
        "create book for missing author", "POST", "/api/books", 422,
        json={"title": "Orphan", "author_id": MAX_ID},
    )
    await run.step("list books", "GET", "/api/books", 200)

    if author is None:
        run.skip("author's books", "GET", f"{_AUTHOR_PATH}/books", 200)
    else:
        await run.step("author's books", "GET", f"{author_path}/books", 200)

    if book is None:
        for name, method, expected in _BOOK_STEPS:
            run.skip(name, method, _BOOK_PATH, expected)
    else:
        book_path = _BOOK_PATH.format(id=book["id"])
        await run.step("show book", "GET", book_path, 200)
        await run.step("update book", "PUT", book_path, 200, json={"page_count": 123})
        await run.step("delete book", "DELETE", book_path, 204)
        await run.step("deleted book is gone", "GET", book_path, 404)

    if author is None:
        run.skip("delete author", "DELETE", _AUTHOR_PATH, 204)
        run.skip("deleted author is gone", "GET", _AUTHOR_PATH, 404)
    else:
        await run.step("delete author", "DELETE", author_path, 204)
        await run.step("deleted author is gone", "GET", author_path, 404)
    return report


async def check_api(client: BibliotecaClient) -> dict:
    report = await run_api_checks(client)
    result = asdict(report)
    result["ok"] = report.ok
    return result
