from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from photo_studio.agents.product_photo_agent.dependencies import get_studio_session
from photo_studio.config.logger import setup_logging
from photo_studio.config.settings import get_settings
from photo_studio.routes import product_photo_agent, studio

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()

    yield

    # Preview handles live only as long as the process serves them
    get_studio_session().close()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"message": f"{settings.APP_NAME} is running"}


# Register routes
app.include_router(studio.router, prefix="/api/v1", tags=["Studio"])
app.include_router(product_photo_agent.router, prefix="/api/v1", tags=["Product Photo Agent"])

if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=settings.APP_PORT)
