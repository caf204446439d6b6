from flask import flash, jsonify, redirect, render_template, request


def wants_json():
    if request.path.startswith("/api/") or request.is_json:
        return True
    return request.accept_mimetypes.best == "application/json"


def request_data():
    """JSON body for API clients, form fields (with repeated keys as lists) otherwise."""
    if request.is_json:
        return request.get_json(silent=True) or {}
    data = {}
    for key in request.form:
        values = request.form.getlist(key)
        data[key] = values if len(values) > 1 else values[0]
    return data


def query_int(name):
    value = request.args.get(name, type=int)
    return value if value else None


def respond(payload, status=200, template=None, redirect_to=None, message=None, **context):
    """Answer JSON clients with ``payload``; browsers get a page or a redirect."""
    if wants_json():
        return jsonify(payload), status
    if redirect_to:
        if message:
            flash(message, "success")
        return redirect(redirect_to)
    return render_template(template, **context), status


def fail(message, status, redirect_to):
    if wants_json():
        return jsonify({"message": message}), status
    flash(message, "danger")
    return redirect(redirect_to)
