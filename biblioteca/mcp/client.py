from httpx import AsyncClient, Response


class BibliotecaClient:
    """Calls the Biblioteca REST API and hands back plain JSON values.

    Client errors come back as ``{"error": True, "status": ..., "detail": ...}``
    so tools can pass them straight to the caller; server errors raise.
    """

    def __init__(self, http: AsyncClient) -> None:
        self.http = http

    async def send(self, method: str, path: str, **kwargs) -> Response:
        """Issue a raw request, returning the response untouched."""
        return await self.http.request(method, path, **kwargs)

    async def call(self, method: str, path: str, **kwargs) -> dict | list:
        return self._handle(await self.send(method, path, **kwargs))

    async def get(self, path: str, **kwargs) -> dict | list:
        return await self.call("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> dict | list:
        return await self.call("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> dict | list:
        return await self.call("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> dict | list:
        return await self.call("DELETE", path, **kwargs)

    @staticmethod
    def _handle(resp: Response) -> dict | list:
        if resp.is_server_error:
            raise RuntimeError(f"Server error {resp.status_code}: {resp.text}")
        if resp.is_client_error:
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            return {"error": True, "status": resp.status_code, "detail": detail}
        if resp.status_code == 204 or not resp.content:
            return {"ok": True}
        return resp.json()


def is_error(result: dict | list) -> bool:
    return isinstance(result, dict) and bool(result.get("error"))
