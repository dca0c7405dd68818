"""HTTP-клиент сервиса TextStore: лента сессии и хранилище записей."""
from pathlib import Path
from typing import Any, Dict, List, Optional
import json
import logging
import uuid

import httpx

from textstore.client.models import AuthEvent, Entry, Session
from textstore.client.store import SessionCallback, Unsubscribe
from textstore.core.config import settings
from textstore.core.errors import RemoteError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0)


def error_message(response: httpx.Response) -> str:
    """Текст ошибки из ответа сервиса"""
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None

    if isinstance(detail, list):
        # Ошибки валидации pydantic
        return "; ".join(str(item.get("msg", item)) for item in detail)
    if detail:
        return str(detail)
    return response.text or response.reason_phrase


def raise_for_error(response: httpx.Response) -> None:
    if response.is_success:
        return
    raise RemoteError(error_message(response), status_code=response.status_code)


class SessionStorage:
    """Токен доступа, сохраненный между запусками"""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or settings.session_file).expanduser()

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text())
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed session file {self.path}")
            return None
        token = data.get("access_token")
        return token if isinstance(token, str) else None

    def save(self, access_token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"access_token": access_token}))

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class HttpAuth:
    """Лента сессии поверх /auth"""

    def __init__(self, http: httpx.AsyncClient, storage: SessionStorage):
        self.http = http
        self.storage = storage
        self.session: Optional[Session] = None
        self._callbacks: List[SessionCallback] = []

    async def _request(self, method: str, url: str, token: Optional[str] = None, **kwargs) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            return await self.http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteError(f"Auth request failed: {e}")

    async def _fetch_session(self, token: str) -> Optional[Session]:
        response = await self._request("GET", "/auth/me", token=token)
        if response.status_code == 401:
            return None
        raise_for_error(response)
        try:
            data = response.json()
            return Session(user_id=data["uuid"], email=data["email"], access_token=token)
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteError(f"Malformed session response: {e}", status_code=response.status_code)

    async def current_session(self) -> Optional[Session]:
        """Сессия из сохраненного токена, если он еще действителен"""
        token = self.storage.load()
        if not token:
            return None

        session = await self._fetch_session(token)
        if session is None:
            logger.info("Stored token is no longer valid")
            self.storage.clear()

        self.session = session
        return session

    def on_session_change(self, callback: SessionCallback) -> Unsubscribe:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def _emit(self, event: AuthEvent) -> None:
        for callback in list(self._callbacks):
            callback(event, self.session)

    async def sign_up(self, email: str, username: str, password: str) -> Dict[str, Any]:
        """Регистрация пользователя; вход выполняется отдельно"""
        response = await self._request(
            "POST", "/auth/register",
            json={"email": email, "username": username, "password": password}
        )
        raise_for_error(response)
        return response.json()

    async def sign_in(self, email: str, password: str) -> Session:
        response = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        raise_for_error(response)
        token = response.json()["access_token"]

        session = await self._fetch_session(token)
        if session is None:
            raise RemoteError("Issued token was rejected", status_code=401)

        self.storage.save(token)
        self.session = session
        self._emit(AuthEvent.SIGNED_IN)
        return session

    async def refresh(self) -> Session:
        if self.session is None:
            raise RemoteError("Not authenticated", status_code=401)

        response = await self._request("POST", "/auth/refresh", token=self.session.access_token)
        raise_for_error(response)
        token = response.json()["access_token"]

        self.storage.save(token)
        self.session = self.session.model_copy(update={"access_token": token})
        self._emit(AuthEvent.TOKEN_REFRESHED)
        return self.session

    async def sign_out(self) -> None:
        if self.session is not None:
            response = await self._request("POST", "/auth/logout", token=self.session.access_token)
            # Просроченный токен не мешает выйти
            if response.status_code != 401:
                raise_for_error(response)

        self.storage.clear()
        self.session = None
        self._emit(AuthEvent.SIGNED_OUT)


class HttpEntryStore:
    """Хранилище записей поверх /entries"""

    def __init__(self, http: httpx.AsyncClient, auth: HttpAuth):
        self.http = http
        self.auth = auth

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        if self.auth.session is None:
            raise RemoteError("Not authenticated", status_code=401)

        headers = {"Authorization": f"Bearer {self.auth.session.access_token}"}
        try:
            response = await self.http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteError(f"Request to {url} failed: {e}")

        raise_for_error(response)
        return response

    async def list_entries(self) -> List[Entry]:
        response = await self._request("GET", "/entries/")
        return [Entry.model_validate(item) for item in response.json()["entries"]]

    async def insert_entry(self, title: str, content: str, owner_id: uuid.UUID) -> None:
        await self._request(
            "POST", "/entries/",
            json={"title": title, "content": content, "owner_id": str(owner_id)}
        )

    async def update_entry(self, entry_id: uuid.UUID, title: str, content: str) -> None:
        await self._request("PUT", f"/entries/{entry_id}", json={"title": title, "content": content})

    async def delete_entry(self, entry_id: uuid.UUID) -> None:
        await self._request("DELETE", f"/entries/{entry_id}")


class TextStoreClient:
    """Клиент сервиса: ``auth`` - лента сессии, ``entries`` - хранилище"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session_file: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.http = httpx.AsyncClient(
            base_url=base_url or settings.api_url,
            transport=transport,
            timeout=DEFAULT_TIMEOUT
        )
        self.auth = HttpAuth(self.http, SessionStorage(session_file))
        self.entries = HttpEntryStore(self.http, self.auth)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "TextStoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
