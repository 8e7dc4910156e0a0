from fastapi import APIRouter

from line_slack_relay.platform.server.routes.base import base_router

root = APIRouter()
root.include_router(base_router)
