"""Health check dashboard for GTP engines.

Each registered check starts an engine, asks for its protocol version and
name, and quits it again.  Results are kept per engine and exposed as JSON
(``/status``) and as a small HTML page (``/``).
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from jinja2 import Template

from api import gnugo
from core.errors import GTPError

logger = logging.getLogger(__name__)

CheckCallable = Callable[[], "CheckResult"]

STATUS_TEMPLATE = Template(
    """
    <html>
    <head><title>Engine Status</title></head>
    <body>
    <h1>Engine Status</h1>
    <table border="1" cellpadding="5">
      <tr><th>Engine</th><th>Name</th><th>Status</th><th>Latency(ms)</th><th>Error</th></tr>
      {% for key, r in results.items() %}
      <tr>
        <td>{{key}}</td>
        <td>{{r.engine or ''}}</td>
        <td>{{r.status}}</td>
        <td>{{ '%.2f' % (r.latency*1000) }}</td>
        <td>{{ r.error or '' }}</td>
      </tr>
      {% endfor %}
    </table>
    </body>
    </html>
    """
)


@dataclass
class CheckResult:
    """Result returned by an engine check."""

    status: str
    latency: float
    error: Optional[str] = None
    engine: Optional[str] = None


def check_engine(
    executable: str = gnugo.DEFAULT_EXECUTABLE,
    args: Sequence[str] = gnugo.DEFAULT_ARGS,
) -> CheckResult:
    """Start ``executable`` and hold a minimal GTP conversation with it.

    ``OK`` means the engine speaks GTP version 2, ``WARN`` that it answered
    with another protocol version and ``DOWN`` that it could not be started
    or broke the conversation.
    """
    start = time.perf_counter()
    try:
        with gnugo.start(executable, args) as session:
            version = gnugo.protocol_version(session)
            engine = gnugo.name(session)
            gnugo.quit(session)
    except GTPError as exc:
        logger.warning("Engine check for %s failed: %s", executable, exc)
        return CheckResult("DOWN", time.perf_counter() - start, str(exc))
    latency = time.perf_counter() - start
    if version != 2:
        return CheckResult("WARN", latency, f"protocol version {version}", engine)
    return CheckResult("OK", latency, None, engine)


class HealthCheckDashboard:
    """Dashboard running named engine checks."""

    def __init__(self) -> None:
        self.checks: Dict[str, CheckCallable] = {}
        self.results: Dict[str, CheckResult] = {}
        self.history: List[Dict[str, Any]] = []
        self.app = FastAPI()
        self.app.get("/status")(self.api_status)
        self.app.get("/")(self.html_status)

    def register(self, name: str, check: CheckCallable) -> None:
        """Register a new check callable."""
        self.checks[name] = check

    def register_engine(self, name: str, executable: str, args: Sequence[str] = gnugo.DEFAULT_ARGS) -> None:
        """Register a :func:`check_engine` run for ``executable``."""
        self.register(name, lambda: check_engine(executable, args))

    async def run_check(self, name: str) -> CheckResult:
        """Run a single check by name in a worker thread."""
        check = self.checks[name]
        start = time.perf_counter()
        try:
            result = await asyncio.to_thread(check)
            if not isinstance(result, CheckResult):
                raise TypeError("Check must return CheckResult")
        except Exception as exc:
            logger.warning("Check %s raised: %s", name, exc)
            result = CheckResult("DOWN", time.perf_counter() - start, str(exc))
        self.results[name] = result
        if result.status != "OK":
            self.history.append({"time": time.time(), "name": name, "result": result})
        return result

    async def run_all(self) -> Dict[str, CheckResult]:
        """Run all registered checks."""
        for name in list(self.checks):
            await self.run_check(name)
        return self.results

    async def api_status(self) -> Dict[str, Any]:
        """FastAPI endpoint returning JSON health status."""
        await self.run_all()
        return {name: asdict(res) for name, res in self.results.items()}

    async def html_status(self) -> HTMLResponse:
        """Return a simple HTML status page."""
        await self.run_all()
        return HTMLResponse(STATUS_TEMPLATE.render(results=self.results))


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for command line."""
    parser = argparse.ArgumentParser(description="GTP engine health check")
    parser.add_argument("--engine", action="append", default=[], help="Engine executable to check")
    parser.add_argument("--serve", action="store_true", help="Start web server")
    parser.add_argument("--port", type=int, default=8000, help="Web server port")
    args = parser.parse_args(argv)

    dash = HealthCheckDashboard()
    for executable in args.engine or [gnugo.DEFAULT_EXECUTABLE]:
        dash.register_engine(executable, executable)

    if args.serve:
        import uvicorn  # pragma: no cover - manual run

        uvicorn.run(dash.app, host="0.0.0.0", port=args.port)
        return

    results = asyncio.run(dash.run_all())
    for name, res in results.items():
        print(name, asdict(res))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
