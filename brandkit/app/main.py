"""FastAPI backend application."""
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from brandkit.app.models import ExtractRequest, ExtractResponse
from brandkit.app.errors import ConfigurationError, PersistFailure, RenderFailure
from brandkit.agents.brand_extractor import BrandKitAgent
from brandkit.app.logger import logger, LOG_FILE

app = FastAPI(
    title="Brand Kit Extractor API",
    description="API for deriving a brand kit (colors, logos, socials, legal text, summary) from a web page",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global agent (initialized on startup)
brand_kit_agent = None


@app.on_event("startup")
def startup_event():
    """Initialize the agent on startup."""
    global brand_kit_agent
    if brand_kit_agent is None:
        brand_kit_agent = BrandKitAgent()


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Brand Kit Extractor API",
        "version": "0.1.0",
        "endpoints": ["/extract", "/health"]
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


# Plain def: Playwright's sync API must not run on the event loop thread
@app.post("/extract", response_model=ExtractResponse)
def extract_brand_kit(request: ExtractRequest):
    """Extract a brand kit from a website URL."""
    if brand_kit_agent is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    logger.info(f"Extracting brand kit from URL: {request.url}")
    try:
        run = brand_kit_agent.extract(request.url, color_strategy=request.color_strategy)
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RenderFailure as e:
        logger.error(f"Render failed: {e}")
        raise HTTPException(status_code=502, detail=f"Could not render page: {e}")
    except PersistFailure as e:
        logger.error(f"Persist failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Could not save brand kit: {e}")

    logger.info(f"Brand kit extraction completed with {len(run.warnings)} degraded field(s)")
    return ExtractResponse(brand_kit=run.brand_kit, output_path=run.output_path, warnings=run.warnings)


def main():
    """Main entry point for running the backend server."""
    logger.info("Starting Brand Kit Extractor API server...")
    logger.info(f"Log file: {LOG_FILE.absolute()}")
    uvicorn.run(
        "brandkit.app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level="warning"
    )


if __name__ == "__main__":
    main()
