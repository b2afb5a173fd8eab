from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def welcome():
    return {"message": "The repofeed API is live!"}
