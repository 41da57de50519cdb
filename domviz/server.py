from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from domviz.commands import ElementNotFoundError
from domviz.document import HTMLDocument
from domviz.locator import locate_element
from domviz.tree import build_tree, flatten_tree

app = FastAPI(title="DOM Visualizer")

# The sidebar front end is served from a different origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class TreeRequest(BaseModel):
    text: str


class LocateRequest(BaseModel):
    text: str
    offset: int = Field(ge=0)


class LocateResponse(BaseModel):
    start: int
    end: int
    snippet: str


@app.get("/health")
async def health_endpoint() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/tree")
async def tree_endpoint(request: TreeRequest) -> dict:
    return {"nodes": flatten_tree(build_tree(request.text))}


@app.post("/locate")
async def locate_endpoint(request: LocateRequest) -> LocateResponse:
    element_range = locate_element(request.text, request.offset)
    if element_range is None:
        line = HTMLDocument(text=request.text).line_at(request.offset)
        raise HTTPException(
            status_code=404, detail=str(ElementNotFoundError(line))
        )
    return LocateResponse(
        start=element_range.start,
        end=element_range.end,
        snippet=element_range.slice(request.text),
    )
