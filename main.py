# main.py

import json
import os

from flask import Flask, Response, current_app, request, jsonify
from werkzeug.exceptions import HTTPException

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

import config
from errors import ApiError, ClientRoutingError, MalformedBodyError
from logger import logger
from order_store import OrderStore

# Prefix of every order API route
URI = "/api/order"

app = Flask(__name__, static_folder=None)
app.config.from_object(config.get_config())

storage_uri = os.environ.get("RATE_LIMIT_STORAGE_URI", "memory://")
limiter = Limiter(
    key_func=get_remote_address,
    app=app,
    storage_uri=storage_uri,
    # Evaluated per request so the configured limits can change at runtime
    default_limits=[lambda: ";".join(current_app.config["RATE_LIMITS"])],
)


@limiter.request_filter
def skip_preflight():
    return request.method == "OPTIONS"


order_store = OrderStore(app.config["DB"])
order_store.bootstrap()


@app.before_request
def answer_preflight():
    # Browsers send OPTIONS to check CORS headers; any path gets an empty 200
    if request.method == "OPTIONS":
        return Response(status=200, mimetype="application/json")
    return None


@app.after_request
def add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


@app.errorhandler(ApiError)
def handle_api_error(ex):
    response = jsonify(ex.data)
    response.status_code = ex.status_code
    return response


@app.errorhandler(HTTPException)
def handle_http_exception(e):
    return jsonify({"message": e.name}), e.code


@app.errorhandler(Exception)
def handle_server_error(e):
    logger.error(f"Unhandled error on {request.method} {request.path}", exc_info=e)
    return jsonify({"message": "Server Error"}), 500


def reject_constant(name):
    # NaN and Infinity are accepted by the json module but are not JSON
    logger.info(f"Rejected order body containing {name}")
    raise MalformedBodyError()


def drain_json():
    """
    Read the whole request body and parse it as a JSON object.

    :raises MalformedBodyError: The body is not UTF-8 JSON or not an object.
    """
    raw = request.get_data()
    try:
        data = json.loads(raw.decode("utf-8"), parse_constant=reject_constant)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.info(f"Rejected malformed order body ({len(raw)} bytes)")
        raise MalformedBodyError()

    if not isinstance(data, dict):
        logger.info("Rejected order body that is not a JSON object")
        raise MalformedBodyError()
    return data


@app.route("/")
@app.route("/index.html")
@limiter.exempt
def index():
    try:
        with open(app.config["INDEX_PAGE"], "r", encoding="utf-8") as f:
            html = f.read()
    except OSError as e:
        logger.warning(f"Landing page unavailable: {e}")
        raise ClientRoutingError()
    return Response(html, status=200, mimetype="text/html")


@app.route(f"{URI}/", methods=["GET"], strict_slashes=False)
def list_orders():
    return jsonify(order_store.list()), 200


@app.route(f"{URI}/", methods=["POST"], strict_slashes=False)
def create_order():
    new_order = order_store.create(drain_json())

    response = jsonify(new_order)
    response.status_code = 201
    response.headers["Access-Control-Expose-Headers"] = "Location"
    response.headers["Location"] = f"{URI}/{new_order['id']}"
    return response


@app.route(f"{URI}/<order_id>", methods=["GET"])
def get_order(order_id):
    order = order_store.get(order_id)
    if order is None:
        raise ClientRoutingError()
    return jsonify(order), 200


def log_startup(port):
    logger.info(f"Order Desk server running at http://localhost:{port}")
    logger.info("Press CTRL+C to stop the server")
    logger.info("Available methods:")
    logger.info(f"GET {URI} - list orders")
    logger.info(f"GET {URI}/{{id}} - fetch a single order")
    logger.info(
        f"POST {URI} - create an order, send a JSON object such as "
        '{"name": string, "surname": string, "tel": string}'
    )


if __name__ == "__main__":
    port = app.config["PORT"]
    log_startup(port)
    app.run(host="0.0.0.0", port=port, debug=app.config["DEBUG"])
