from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import tenants, customers, jobs, calculate, abn

logger = logging.getLogger("pavequote")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="PaveQuote",
    description="Job scoping, tonnage and GST quote calculation for asphalt contractors",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(tenants.router, prefix="/api")
app.include_router(customers.router, prefix="/api")
app.include_router(jobs.router, prefix="/api")
app.include_router(calculate.router, prefix="/api")
app.include_router(abn.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "pavequote", "company": settings.COMPANY_NAME}
