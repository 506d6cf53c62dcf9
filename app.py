from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.report_routes import router as report_router

# -------------------------------------------------
# APP INIT
# -------------------------------------------------
app = FastAPI(title="AWR Top SQL Parser")

# -------------------------------------------------
# CORS (UI + API Safe)
# -------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------------------------------------------------
# ROUTERS
# -------------------------------------------------
app.include_router(report_router, prefix="/api")

# -------------------------------------------------
# HEALTH CHECK
# -------------------------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}

# -------------------------------------------------
# LOCAL DEV RUN
# -------------------------------------------------
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=4539,
        reload=True
    )
