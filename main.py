from starlette.applications import Starlette
from starlette.responses import JSONResponse, Response
from starlette.requests import Request
from starlette.routing import Route
from typing import Optional
from pydantic import ValidationError
from config import DEBUG, HOST, PORT
from dispatcher import Dispatcher
from models import CarIn, JourneyIn, GroupForm, RideOutcome, DropOutcome, NOT_FOUND, WAITING
import json
import logging
import re

logger = logging.getLogger(__name__)

JSON_TYPE = re.compile(r"^application/json(;.*)?$")
FORM_TYPE = re.compile(r"^application/x-www-form-urlencoded(;.*)?$")

# routes answer 400, not 405, to an unexpected method
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "CONNECT", "TRACE"]

RIDE_STATUS = {
    RideOutcome.SEATED: 200,
    RideOutcome.ENQUEUED: 202,
    RideOutcome.ALREADY_KNOWN: 202,
}

DROP_STATUS = {
    DropOutcome.DROPPED_TRAVELING: 200,
    DropOutcome.DROPPED_WAITING: 204,
    DropOutcome.NOT_FOUND: 404,
}


def bad_request(endpoint: str, reason: str, err=None):
    if err is not None:
        logger.warning(f"{endpoint} rejected: {reason}: {err}")
    else:
        logger.warning(f"{endpoint} rejected: {reason}")
    return Response(status_code=400)


def check_request(request: Request, method: str, content_type=None):
    if request.method != method:
        return "unexpected method"
    if content_type is not None and not content_type.match(request.headers.get("content-type", "")):
        return "unexpected content type"
    return None


async def read_group_form(request: Request) -> GroupForm:
    form = await request.form()
    return GroupForm.model_validate({"id": form.get("ID")})


async def get_status(request: Request):
    reason = check_request(request, "GET")
    if reason:
        return bad_request("status", reason)
    return Response(status_code=200)


async def put_cars(request: Request):
    reason = check_request(request, "PUT", JSON_TYPE)
    if reason:
        return bad_request("cars", reason)
    try:
        payload = await request.json()
        if not isinstance(payload, list):
            return bad_request("cars", "payload is not a list")
        cars = [CarIn.model_validate(item) for item in payload]
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError, ValidationError) as err:
        return bad_request("cars", "payload can't be decoded", err)
    request.app.state.dispatcher.load((c.id, c.seats) for c in cars)
    logger.info(f"cars loaded: {len(cars)}")
    return Response(status_code=200)


async def post_journey(request: Request):
    reason = check_request(request, "POST", JSON_TYPE)
    if reason:
        return bad_request("journey", reason)
    try:
        journey = JourneyIn.model_validate(await request.json())
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError, ValidationError) as err:
        return bad_request("journey", "payload can't be decoded", err)
    outcome = request.app.state.dispatcher.request_ride(journey.id, journey.people)
    logger.info(f"journey {journey.id}: {outcome.value}")
    return Response(status_code=RIDE_STATUS[outcome])


async def post_dropoff(request: Request):
    reason = check_request(request, "POST", FORM_TYPE)
    if reason:
        return bad_request("dropoff", reason)
    try:
        group = await read_group_form(request)
    except ValidationError as err:
        return bad_request("dropoff", "payload can't be decoded", err)
    outcome = request.app.state.dispatcher.drop_off(group.id)
    logger.info(f"dropoff {group.id}: {outcome.value}")
    return Response(status_code=DROP_STATUS[outcome])


async def post_locate(request: Request):
    reason = check_request(request, "POST", FORM_TYPE)
    if reason:
        return bad_request("locate", reason)
    try:
        group = await read_group_form(request)
    except ValidationError as err:
        return bad_request("locate", "payload can't be decoded", err)
    location = request.app.state.dispatcher.locate(group.id)
    if location.car_id == NOT_FOUND:
        logger.info(f"locate {group.id}: not found")
        return Response(status_code=404)
    if location.car_id == WAITING:
        logger.info(f"locate {group.id}: waiting")
        return Response(status_code=204)
    logger.info(f"locate {group.id}: traveling in car {location.car_id}")
    return JSONResponse({"id": location.car.id, "seats": location.car.seats_total})


routes = [
    Route("/status", get_status, methods=ALL_METHODS),
    Route("/cars", put_cars, methods=ALL_METHODS),
    Route("/journey", post_journey, methods=ALL_METHODS),
    Route("/dropoff", post_dropoff, methods=ALL_METHODS),
    Route("/locate", post_locate, methods=ALL_METHODS),
]


def create_app(dispatcher: Optional[Dispatcher] = None, debug: bool = DEBUG) -> Starlette:
    app = Starlette(debug=debug, routes=routes)
    app.state.dispatcher = dispatcher or Dispatcher()
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
