from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.endpoints import router
from app.config import settings

app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="マンション説明文・キャッチコピー生成 API",
)

_wildcard = settings.cors_allow_origins == ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=not _wildcard,  # "*" と credentials は併用不可
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api/v1")

@app.get("/")
async def root():
    return {"message": "Mansion Copy Generator API running"}

@app.get("/health")
async def health():
    return {"status": "ok"}
