from __future__ import annotations
from flask import Flask, Response, request, current_app
import json as stdjson

try:
    import orjson as _oj
    def dumps(obj): return _oj.dumps(obj).decode()
except Exception:
    _oj = None
    def dumps(obj): return stdjson.dumps(obj)

from ..config import CFG
from ..session import PortChecker

def _json(obj, status: int = 200) -> Response:
    resp = Response(dumps(obj), status=status, mimetype="application/json")
    resp.headers["Cache-Control"] = "no-store"
    return resp

def _body() -> dict:
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict() or request.args.to_dict()

def state_dict(checker: PortChecker) -> dict:
    view = checker.registry.snapshot()
    pending = checker.pending
    flt = view.last_filter
    return {
        "records": [r.to_dict() for r in view.records],
        "status": view.status,
        "is_refreshing": view.is_refreshing,
        "filter": None if flt is None else {"mode": flt.mode, "port": flt.port},
        "pending": None if pending is None else pending.to_dict(),
    }

def create_app(cfg: CFG, checker: PortChecker) -> Flask:
    app = Flask(__name__)
    app.config["PORTCHECKER_CFG"] = cfg

    @app.get("/api/state")
    def api_state():
        return _json(state_dict(checker))

    @app.post("/api/query")
    def api_query():
        text = str(_body().get("port", ""))
        ok = checker.query_port(text)
        return _json(state_dict(checker), status=200 if ok else 400)

    @app.post("/api/query_all")
    def api_query_all():
        checker.query_all()
        return _json(state_dict(checker))

    @app.post("/api/terminate")
    def api_terminate():
        try:
            pid = int(_body().get("pid"))
        except (TypeError, ValueError):
            return _json({"error": "pid required"}, status=400)
        record = checker.request_terminate(pid)
        if record is None:
            return _json({"error": f"pid {pid} is not in the current listing"}, status=404)
        return _json({"pending": record.to_dict(), "prompt": checker.confirmation_prompt()})

    @app.post("/api/terminate/confirm")
    def api_terminate_confirm():
        outcome = checker.confirm_terminate()
        if outcome is None:
            return _json({"error": "nothing to terminate"}, status=409)
        current_app.logger.info("terminate: %s", outcome.message)
        return _json({"terminated": outcome.terminated, "code": outcome.code,
                      "elevated": outcome.elevated, "message": outcome.message})

    @app.post("/api/terminate/cancel")
    def api_terminate_cancel():
        checker.cancel_terminate()
        return _json(state_dict(checker))

    return app
