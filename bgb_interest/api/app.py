"""FastAPI application entry point."""

from fastapi import FastAPI

from bgb_interest.api.routes import interest, rates

app = FastAPI(
    title="BGB Interest",
    description="Default interest calculation per §288 BGB",
    version="0.1.0",
)

app.include_router(interest.router)
app.include_router(rates.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
