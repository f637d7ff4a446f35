import aiohttp

USER_AGENT = "revisualise-bot/0.1"


class _HttpClient:
    """
    Lazily created aiohttp session shared by the HTTP-based provider clients.

    Image generation is slow, so the read timeout is generous; there is no
    total timeout and no retry here.
    """
    def __init__(
        self,
        *,
        timeout_connect: float = 10.0,
        timeout_read: float = 180.0,
        limit: int = 20,
    ) -> None:
        self._timeout = aiohttp.ClientTimeout(
            total=None, connect=timeout_connect, sock_read=timeout_read
        )
        self._limit = limit
        self._session: aiohttp.ClientSession | None = None

    async def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                connector=aiohttp.TCPConnector(limit=self._limit, ttl_dns_cache=300),
                headers={"User-Agent": USER_AGENT},
                trust_env=True,
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None


# A single, shared instance to be used across the application
http_client = _HttpClient()
