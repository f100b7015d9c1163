#!/usr/bin/env python3
"""
web_remote.py  –  web remote + diagnostics for the scoreboard kiosk

Endpoints
---------
/               → HTML page with buttons, current state and diagnostics
/state          → JSON snapshot of what is on screen
/diag, /data    → JSON object of diagnostic metrics
/action?cmd=…   → inject control commands (next, prev, pause, har, mode,
                  total, percent, quit)
/log            → contents of the runtime log (if present)
"""

from __future__ import annotations
import http.server
import logging
import socketserver
import threading
import urllib.parse
import json
import time
import os
import traceback
import psutil
import platform
from typing import TYPE_CHECKING, Any

from events import EventManager
import config

if TYPE_CHECKING:                       # avoid circular import at runtime
    from app import ScoreboardKiosk

logger = logging.getLogger(__name__)

# ── diagnostics refresh cadence ───────────────────────────────────────────
_last_diag_time = 0.0
_diag_interval  = config.DIAG_REFRESH_INTERVAL

# ── global diagnostic store ───────────────────────────────────────────────
monitor_data: dict[str, Any] = {
    "cpu_percent":       0.0,
    "mem_used":          "0 MB",
    "mem_total":         "0 MB",
    "script_uptime":     "0d 00:00:00",
    "machine_uptime":    "0d 00:00:00",
    "load_avg":          "",
    "last_http_crash":   "",
    "python_version":    platform.python_version(),
}

_script_start = time.monotonic()
_boot_time    = psutil.boot_time()

# ── remote commands → actions ─────────────────────────────────────────────
COMMANDS: dict[str, dict] = {
    "next":    {"type": "navigate", "to": "next"},
    "prev":    {"type": "navigate", "to": "prev"},
    "pause":   {"type": "toggle_pause"},
    "har":     {"type": "toggle_optional"},
    "mode":    {"type": "toggle_mode"},
    "total":   {"type": "set_mode", "mode": "total"},
    "percent": {"type": "set_mode", "mode": "percent"},
    "quit":    {"type": "quit"},
}


# ── helpers ────────────────────────────────────────────────────────────────
def _fmt_duration(secs: float) -> str:
    d, rem = divmod(int(secs), 86400)
    h, rem = divmod(rem, 3600)
    m, s   = divmod(rem, 60)
    return f"{d}d {h:02}:{m:02}:{s:02}"


def _maybe_update_diagnostics() -> None:
    global _last_diag_time
    now = time.monotonic()
    if now - _last_diag_time >= _diag_interval:
        _last_diag_time = now
        _update_diagnostics()


def _update_diagnostics() -> None:
    """Refresh CPU, memory, uptime and load in `monitor_data`."""
    monitor_data["cpu_percent"] = round(psutil.cpu_percent(), 1)
    vm = psutil.virtual_memory()
    monitor_data["mem_used"]  = f"{vm.used // 1024**2} MB"
    monitor_data["mem_total"] = f"{vm.total // 1024**2} MB"
    now = time.monotonic()
    monitor_data["script_uptime"]  = _fmt_duration(now - _script_start)
    monitor_data["machine_uptime"] = _fmt_duration(time.time() - _boot_time)
    try:
        la = os.getloadavg()
        monitor_data["load_avg"] = ", ".join(f"{x:.2f}" for x in la)
    except (AttributeError, OSError):
        monitor_data["load_avg"] = "N/A"


def command_action(cmd: str) -> dict | None:
    act = COMMANDS.get(cmd)
    return dict(act) if act else None


# ── reusable threaded HTTP server ──────────────────────────────────────────
class ReusableTCPServer(socketserver.ThreadingMixIn, http.server.HTTPServer):
    daemon_threads      = True
    allow_reuse_address = True


# ── request handler ────────────────────────────────────────────────────────
class RemoteHandler(http.server.BaseHTTPRequestHandler):
    def log_message(self, *args):
        return  # silence default logging

    def do_GET(self):
        parsed = urllib.parse.urlparse(self.path)
        path, qs = parsed.path, parsed.query

        if path == "/":
            return self._serve_html()
        if path == "/state":
            kiosk = self.server.kiosk      # type: ignore[attr-defined]
            return self._serve_json(kiosk.session.snapshot().as_dict())
        if path in ("/diag", "/data"):
            _maybe_update_diagnostics()
            return self._serve_json(monitor_data)
        if path == "/log":
            return self._serve_log()
        if path == "/action":
            return self._serve_action(qs)

        self.send_error(404, "Not found")

    # ── helpers for each route ───────────────────────────────────────────
    def _serve_html(self):
        self.send_response(200)
        self.send_header("Content-Type", "text/html")
        self.end_headers()
        self.wfile.write(HTML_PAGE.encode("utf-8"))

    def _serve_json(self, obj: Any):
        b = json.dumps(obj).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(b)))
        self.end_headers()
        self.wfile.write(b)

    def _serve_log(self):
        try:
            with open(config.LOG_FILE, "rb") as f:
                data = f.read()
        except OSError:
            return self.send_error(404, "Log file not found")
        self.send_response(200)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def _serve_action(self, query: str):
        qs = urllib.parse.parse_qs(query)
        act = command_action(qs.get("cmd", [""])[0])
        if act is None:
            return self.send_error(400, "Unknown cmd")
        EventManager.post(act)
        self.send_response(204)
        self.end_headers()


# ── simple HTML UI ─────────────────────────────────────────────────────────
HTML_PAGE = """
<!doctype html><html><head><meta charset="utf-8">
<title>Scoreboard Remote</title>
<style>
 body{background:#fff;color:#0b2d71;font-family:sans-serif;padding:1em;}
 a.button{display:inline-block;margin:4px;padding:6px 12px;border:1px solid #0b2d71;
          text-decoration:none;color:#0b2d71;}
 pre{margin:0.5em 0;font-family:monospace;}
</style></head><body>
<h2>Scoreboard Remote</h2>
<a class="button" href="/action?cmd=prev">&lsaquo; Prev</a>
<a class="button" href="/action?cmd=next">Next &rsaquo;</a>
<a class="button" href="/action?cmd=pause">Pause / resume</a>
<a class="button" href="/action?cmd=har">Toggle HAR</a>
<a class="button" href="/action?cmd=total">Total</a>
<a class="button" href="/action?cmd=percent">%</a>
<a class="button" href="/action?cmd=mode">Toggle mode</a>
<a class="button" href="/action?cmd=quit">Quit</a>
<a class="button" href="/log">View log</a>

<div><h3>On screen</h3><pre id="state"></pre></div>
<div><h3>Diagnostics</h3><pre id="diag"></pre></div>

<script>
 async function refreshUI(){
   try {
     let s  = await fetch('/state'); let st = await s.json();
     let lines = [st.header + '  [' + st.page + ', ' + st.mode +
                  (st.is_paused ? ', paused' : '') + ']'];
     for (let r of st.records){
       lines.push(Object.values(r).join('  '));
     }
     document.getElementById('state').textContent = lines.join('\\n');
     let d  = await fetch('/diag');    let dg = await d.json();
     let txt = '';
     for (let [k,v] of Object.entries(dg)){
       txt += k.padEnd(20,' ') + v + '\\n';
     }
     document.getElementById('diag').textContent = txt;
   } catch(e){
     console.error(e);
   }
 }
 setInterval(refreshUI, 1000);
 refreshUI();
</script>
</body></html>
"""


# ── server bootstrap with auto-restart ────────────────────────────────────
def start(kiosk: "ScoreboardKiosk", port: int = config.WEB_PORT):
    def _serve_loop():
        while True:
            try:
                with ReusableTCPServer(("", port), RemoteHandler) as httpd:
                    httpd.kiosk = kiosk
                    httpd.serve_forever()
            except Exception:
                tb = traceback.format_exc()
                monitor_data["last_http_crash"] = tb
                logger.error("Web remote crashed, restarting:\n%s", tb)
                time.sleep(1)

    threading.Thread(target=_serve_loop, daemon=True).start()
    logger.info("Web remote & diagnostics listening on port %d", port)
