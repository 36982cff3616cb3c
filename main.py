import logging
import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Routers
from routers.questions import router as questions_router
from routers.store import router as store_router

logger = logging.getLogger("question-authoring")
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="RegenCHOICE – Question Authoring API")

_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:8080"
origins = [o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "x-api-key"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(store_router)  # /api?action=load|save|info
app.include_router(questions_router)  # /questions/...


def run() -> None:
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    logger.info("Serving question API on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
