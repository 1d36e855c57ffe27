"""VulnLab — deliberately misconfigured web server for MethodScanner testing.

Each endpoint answers HTTP methods the way a badly configured server would:
TRACE echoing headers back, WebDAV verbs left enabled, auth checks that
only guard GET, and so on.  Run it and point the scanner at it:

    python -m vuln_lab.app
    methodscanner -u http://127.0.0.1:5000/admin -v
"""

from flask import Flask, Response, jsonify, make_response, render_template_string, request

app = Flask(__name__)

ALL_METHODS = [
    "GET", "POST", "PUT", "DELETE", "HEAD", "OPTIONS", "PATCH",
    "TRACE", "CONNECT", "PROPFIND", "PROPPATCH", "MKCOL", "COPY",
    "MOVE", "LOCK", "UNLOCK", "PURGE", "LINK", "UNLINK",
]

ADMIN_USER = "admin"
ADMIN_PASS = "s3cret"


# ── Shared HTML layout ──────────────────────────────────────────

_LAYOUT = """<!DOCTYPE html>
<html><head><title>VulnLab — {{ title }}</title>
<style>
body{font-family:monospace;background:#111;color:#0f0;max-width:900px;margin:0 auto;padding:2rem}
a{color:#0ff}h1{color:#f00}h2{color:#ff0}
</style></head>
<body>
<h1>VulnLab</h1>
<h2>{{ title }}</h2>
{{ content|safe }}
</body></html>
"""


def page(title, content):
    return render_template_string(_LAYOUT, title=title, content=content)


# ══════════════════════════════════════════════════════════════════
#  HOME — GET only; everything else gets Flask's 405
# ══════════════════════════════════════════════════════════════════

@app.route("/")
def home():
    return page("Home", """
    <ul>
        <li><a href="/trace">TRACE echo (Cross-Site Tracing)</a></li>
        <li><a href="/dav">WebDAV verbs enabled</a></li>
        <li><a href="/tamper">Every verb accepted</a></li>
        <li><a href="/admin">GET-only authentication (verb tampering)</a></li>
        <li><a href="/locked">Properly locked down</a></li>
        <li><a href="/echo">Request echo (JSON)</a></li>
    </ul>
    """)


# ══════════════════════════════════════════════════════════════════
#  TRACE — echoes the raw request head back, like Apache TraceEnable On
# ══════════════════════════════════════════════════════════════════

@app.route("/trace", methods=["GET", "TRACE"])
def trace():
    if request.method != "TRACE":
        return page("TRACE", "<p>Send a TRACE request.</p>")
    lines = [f"TRACE {request.full_path.rstrip('?')} HTTP/1.1"]
    lines += [f"{k}: {v}" for k, v in request.headers.items()]
    return Response("\r\n".join(lines) + "\r\n", status=200, mimetype="message/http")


# ══════════════════════════════════════════════════════════════════
#  WebDAV — write/collection verbs left on
# ══════════════════════════════════════════════════════════════════

_DAV_STATUS = {
    "GET": 200, "PUT": 201, "DELETE": 204, "MKCOL": 201, "COPY": 201,
    "MOVE": 201, "PROPFIND": 207, "PROPPATCH": 207, "LOCK": 200, "UNLOCK": 204,
}


@app.route("/dav", methods=list(_DAV_STATUS))
def dav():
    code = _DAV_STATUS[request.method]
    body = "" if code == 204 else f"<d:multistatus xmlns:d='DAV:'>{request.method}</d:multistatus>"
    return Response(body, status=code, mimetype="application/xml")


# ══════════════════════════════════════════════════════════════════
#  Tamper — anything goes
# ══════════════════════════════════════════════════════════════════

@app.route("/tamper", methods=ALL_METHODS)
def tamper():
    return f"{request.method} accepted\n"


# ══════════════════════════════════════════════════════════════════
#  Admin — only GET/HEAD/OPTIONS are behind basic auth
# ══════════════════════════════════════════════════════════════════

@app.route("/admin", methods=ALL_METHODS)
def admin():
    if request.method in ("GET", "HEAD", "OPTIONS"):
        auth = request.authorization
        if not auth or auth.username != ADMIN_USER or auth.password != ADMIN_PASS:
            resp = make_response("Unauthorized\n", 401)
            resp.headers["WWW-Authenticate"] = 'Basic realm="vulnlab"'
            return resp
    return page("Admin", f"<p>Welcome to the admin panel ({request.method}).</p>")


# ══════════════════════════════════════════════════════════════════
#  Locked — reference for a sane configuration
# ══════════════════════════════════════════════════════════════════

@app.route("/locked", methods=ALL_METHODS)
def locked():
    if request.method in ("GET", "HEAD"):
        return page("Locked", "<p>Nothing to see here.</p>")
    if request.method in ("POST", "PUT", "DELETE", "PATCH", "OPTIONS"):
        resp = make_response("Method Not Allowed\n", 405)
        resp.headers["Allow"] = "GET, HEAD"
        return resp
    return make_response("Not Implemented\n", 501)


# ══════════════════════════════════════════════════════════════════
#  Echo — shows what the scanner actually sent
# ══════════════════════════════════════════════════════════════════

@app.route("/echo", methods=ALL_METHODS)
def echo():
    auth = request.authorization
    return jsonify({
        "method": request.method,
        "headers": [[k, v] for k, v in request.headers.items()],
        "cookies": request.cookies.to_dict(),
        "auth": [auth.username, auth.password] if auth else None,
    })


# ══════════════════════════════════════════════════════════════════
#  Main
# ══════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    print("\n  VulnLab starting on http://0.0.0.0:5000\n")
    app.run(host="0.0.0.0", port=5000, debug=True)
