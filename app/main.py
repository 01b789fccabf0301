import os

from dotenv import load_dotenv


from fastapi import FastAPI

from app.api.api_v1 import router as api_v1
from app.core.logging import setup_logging

load_dotenv()  # Load .env variables into os.environ

setup_logging(os.getenv("LOG_LEVEL", "INFO"))

app = FastAPI(title="Dependabot Deploy Gate")


@app.get("/")
def root():
    return {"message": "Hello from dependabot-deploy-gate!"}


app.include_router(api_v1)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
