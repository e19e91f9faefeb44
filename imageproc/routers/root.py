from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["root"])

WELCOME_MESSAGE = "Welcome to the Image Processor!"


@router.get("/", response_class=PlainTextResponse)
async def root():
    return WELCOME_MESSAGE
