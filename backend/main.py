import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from schedsim import __version__
from schedsim.api.routes_sim import router as sim_router
from schedsim.api.ws import router as ws_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="CPU Scheduling Simulator API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(sim_router)
app.include_router(ws_router)


@app.get("/health")
def health():
    return {"ok": True}

@app.get("/")
def root():
    return {"ok": True, "hint": "Use /health, /docs, /sim/simulate or /sim/state"}
