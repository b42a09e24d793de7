from flask import Blueprint, current_app, jsonify, request

from core.router import OPERATIONS, Operation

router = Blueprint("das", __name__, url_prefix="/api")


def _make_view(operation: Operation):
    async def view():
        das_router = current_app.extensions["das_router"]
        body = request.get_json(silent=True)
        payload, status = await das_router.handle(operation, body)
        return jsonify(payload), status

    view.__name__ = operation.name
    view.__doc__ = f"POST /api{operation.path} -> {operation.method}"
    return view


for _operation in OPERATIONS:
    router.add_url_rule(_operation.path, view_func=_make_view(_operation), methods=["POST"])
