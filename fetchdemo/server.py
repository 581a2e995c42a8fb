import json
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from fetchdemo.core import (
    SubmissionStore,
    checkbox_message,
    iso_now,
    load_tables,
    radio_response,
    select_message,
)

APP_ROOT = Path(__file__).resolve().parent.parent
DATA_PATH = APP_ROOT / "data" / "canned_responses.json"
LOG_PATH = APP_ROOT / "logs" / "events.jsonl"
PUBLIC_DIR = APP_ROOT / "public"

HOST = "0.0.0.0"
PORT = 3000

ENDPOINTS = [
    ("GET", "/api/test"),
    ("POST", "/api/checkbox"),
    ("POST", "/api/radio"),
    ("POST", "/api/selectbox"),
    ("GET", "/api/user/{user_id}"),
    ("POST", "/api/form/submit"),
    ("GET", "/api/form/submissions"),
]

router = APIRouter(prefix="/api")


def log_event(request: Request, event: dict):
    log_path: Path = request.app.state.log_path
    record = {
        "timestamp": time.time(),
        "request_id": str(uuid.uuid4()),
        "method": request.method,
        "route": str(request.url.path),
        **event,
    }
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with open(log_path, "a", encoding="utf-8") as f:
        f.write(json.dumps(record, ensure_ascii=False) + "\n")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "message": message})


def get_store(request: Request) -> SubmissionStore:
    return request.app.state.store


@router.get("/test")
async def echo_test(request: Request):
    log_event(request, {"status": "success"})
    return {
        "status": "success",
        "message": "The API is working correctly!",
        "timestamp": iso_now(),
    }


@router.post("/checkbox")
async def checkbox(request: Request):
    body = await request.json()
    items = body.get("checkedItems") or []
    log_event(request, {"checkedItems": items, "status": "success"})

    return {
        "status": "success",
        "count": len(items),
        "items": items,
        "message": checkbox_message(items),
    }


@router.post("/radio")
async def radio(request: Request):
    body = await request.json()
    selected = body.get("selectedValue")
    log_event(request, {"selectedValue": selected, "status": "success"})

    return {
        "status": "success",
        "selected": selected,
        **radio_response(selected, request.app.state.radio),
    }


@router.post("/selectbox")
async def selectbox(request: Request):
    body = await request.json()
    selected = body.get("selectedItem")

    if not selected:
        log_event(request, {"selectedItem": selected, "status": "error"})
        return error_response(400, "No selected item was sent")

    log_event(request, {"selectedItem": selected, "status": "success"})
    return {
        "status": "success",
        "selectedValue": selected,
        "message": select_message(selected),
    }


@router.get("/user/{user_id}")
async def user_lookup(user_id: str, request: Request):
    user = request.app.state.users.get(user_id)

    if user is None:
        log_event(request, {"user_id": user_id, "status": "error"})
        return error_response(404, "User not found")

    log_event(request, {"user_id": user_id, "status": "success"})
    return {"status": "success", "data": dict(user)}


@router.post("/form/submit")
async def form_submit(request: Request, store: SubmissionStore = Depends(get_store)):
    form_data = await request.json()

    if not isinstance(form_data, dict):
        log_event(request, {"status": "error"})
        return error_response(400, "Form data must be a JSON object")

    submission = store.add(form_data)
    log_event(request, {"submission_id": submission["id"], "status": "success"})

    return {
        "status": "success",
        "message": "Data saved",
        "data": submission,
    }


@router.get("/form/submissions")
async def form_submissions(request: Request, store: SubmissionStore = Depends(get_store)):
    log_event(request, {"count": len(store), "status": "success"})
    return {
        "status": "success",
        "count": len(store),
        "data": store.all(),
    }


async def unhandled_error(request: Request, exc: Exception):
    log_event(request, {
        "status": "error",
        "error_type": type(exc).__name__,
        "error": str(exc),
    })
    return error_response(500, "A server error occurred")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    The submission store lives exactly as long as the running app.
    """
    app.state.store = SubmissionStore()
    yield
    app.state.store.clear()


def create_app(data_path: Path = DATA_PATH, log_path: Path = LOG_PATH, public_dir: Path = PUBLIC_DIR) -> FastAPI:
    app = FastAPI(title="Fetch Demo API", lifespan=lifespan)

    app.state.radio, app.state.users = load_tables(data_path)
    app.state.log_path = log_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, unhandled_error)
    app.include_router(router)

    # must stay last: "/" swallows every path the API routes did not match
    app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")
    return app


app = create_app()


def main():
    print(f"🚀 Server started: http://localhost:{PORT}")
    print("📝 API endpoints:")
    for method, path in ENDPOINTS:
        print(f"   {method:<5}{path}")
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
