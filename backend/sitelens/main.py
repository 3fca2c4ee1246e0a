from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from sitelens.analysis import run_analysis
from sitelens.errors import InvalidURLError, NavigationError
from sitelens.store import AnalysisStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one store for the life of the process
    app.state.store = AnalysisStore()
    yield
    # Shutdown (nothing needed)


app = FastAPI(title="Site Analysis API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_store(request: Request) -> AnalysisStore:
    return request.app.state.store


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class AnalyzeRequest(BaseModel):
    url: str


class AnalyzeData(BaseModel):
    id: str
    status: str


class AnalyzeResponse(BaseModel):
    success: bool
    message: str
    data: AnalyzeData


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/analyze", response_model=AnalyzeResponse)
async def analyze_endpoint(body: AnalyzeRequest, store: AnalysisStore = Depends(get_store)):
    """
    Analyze a website synchronously: scrape, run the analyzers, generate
    insights, store the result and return its id.
    """
    try:
        result = await run_analysis(body.url, store=store)
    except InvalidURLError as e:
        print(f"[api] Rejected URL {body.url!r}: {e}")
        raise HTTPException(status_code=400, detail="Invalid URL provided")
    except NavigationError as e:
        print(f"[api] Navigation failed: {e}")
        raise HTTPException(status_code=502, detail=f"Could not reach {e.url}")
    except Exception as e:
        print(f"[api] Analysis failed: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return AnalyzeResponse(
        success=True,
        message="Analysis completed",
        data=AnalyzeData(id=result.id, status=result.status),
    )


@app.get("/analysis/{analysis_id}")
async def get_analysis_endpoint(analysis_id: str, store: AnalysisStore = Depends(get_store)):
    result = store.get(analysis_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Analysis not found")
    return result.model_dump(mode="json")
