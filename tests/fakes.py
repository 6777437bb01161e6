"""
tests/fakes.py: In-process stand-ins for qBittorrent and Jellyfin.
"""
import asyncio
from typing import Any, Dict, List, Optional, Tuple

from aiohttp import web


class StopLoop(Exception):
    """Raised by SleepRecorder to break out of the endless poll loop."""


class SleepRecorder:
    """Async sleep replacement that records delays and stops after N calls."""

    def __init__(self, stop_after: Optional[int] = None):
        self.calls: List[float] = []
        self.stop_after = stop_after

    async def __call__(self, seconds: float):
        self.calls.append(seconds)
        if self.stop_after is not None and len(self.calls) >= self.stop_after:
            raise StopLoop()


class FakeQBittorrent:
    """Records login and setUploadLimit calls; responses are scripted."""

    def __init__(self):
        self.login_status = 200
        self.login_cookie: Optional[str] = "SID=abc"
        # Per-call overrides, consumed in order: (status, cookie)
        self.login_script: List[Tuple[int, Optional[str]]] = []
        self.apply_script: List[int] = []
        self.logins: List[Dict[str, Any]] = []
        self.applies: List[Dict[str, Any]] = []
        self.events: Optional[List[str]] = None

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/api/v2/auth/login", self.login)
        app.router.add_post("/api/v2/transfer/setUploadLimit", self.set_upload_limit)
        return app

    async def login(self, request: web.Request) -> web.Response:
        form = await request.post()
        self.logins.append({
            "username": form.get("username"),
            "password": form.get("password"),
            "referer": request.headers.get("Referer"),
        })
        if self.events is not None:
            self.events.append("login")

        status, cookie = self.login_script.pop(0) if self.login_script else (self.login_status, self.login_cookie)
        headers = {"Set-Cookie": cookie} if cookie else {}
        return web.Response(status=status, text="Ok." if status == 200 else "Forbidden", headers=headers)

    async def set_upload_limit(self, request: web.Request) -> web.Response:
        form = await request.post()
        self.applies.append({
            "limit": form.get("limit"),
            "cookie": request.headers.get("Cookie"),
        })
        if self.events is not None:
            self.events.append(f"apply:{form.get('limit')}")

        status = self.apply_script.pop(0) if self.apply_script else 200
        return web.Response(status=status)


class FakeJellyfin:
    """Serves /Sessions; responses are scripted as (status, raw body)."""

    def __init__(self):
        self.default: Tuple[int, str] = (200, "[]")
        # Seconds to stall before answering
        self.delay: float = 0
        self.script: List[Tuple[int, str]] = []
        self.requests: List[Dict[str, Any]] = []
        self.events: Optional[List[str]] = None

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/Sessions", self.sessions)
        return app

    async def sessions(self, request: web.Request) -> web.Response:
        self.requests.append({
            "authorization": request.headers.get("Authorization"),
            "active_within": request.query.get("activeWithinSeconds"),
        })
        if self.events is not None:
            self.events.append("sample")

        if self.delay:
            await asyncio.sleep(self.delay)

        status, body = self.script.pop(0) if self.script else self.default
        return web.Response(status=status, text=body, content_type="application/json")
