from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vidnotes.api.routes.notes import router as notes_router

app = FastAPI(
    title="vidnotes API",
    description="Structured notes from long video transcripts",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(notes_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
