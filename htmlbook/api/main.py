"""HTMLBook converter API.

Serves document-tree to HTMLBook conversion over HTTP:
- Whole documents and single nodes
- Table-of-contents outlines
- Template discovery
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from htmlbook import __version__
from htmlbook.api.routes import convert, templates
from htmlbook.converter.converter import get_converter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: build the converter and report the template search path
    converter = get_converter()
    search_path = ", ".join(str(path) for path in converter.registry.search_path)
    logger.info(f"Template search path: {search_path}")
    logger.info(f"{len(converter.registry.list_names())} templates available")

    logger.info("HTMLBook converter API ready")
    yield
    logger.info("Shutting down HTMLBook converter API")


app = FastAPI(
    title="HTMLBook Converter API",
    description="""
## Document tree to HTMLBook

Converts parsed semantic document trees (sections, blocks, lists,
tables, inline spans) into HTMLBook markup through Jinja2 templates.

### Key Endpoints

- `POST /v1/convert` - Convert a document tree
- `POST /v1/convert/node` - Convert a single node
- `POST /v1/convert/outline` - Table-of-contents outline
- `GET /v1/templates` - List available templates
""",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(convert.router, prefix="/v1")
app.include_router(templates.router, prefix="/v1")


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "service": "HTMLBook Converter API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "convert": "/v1/convert",
            "convert_node": "/v1/convert/node",
            "outline": "/v1/convert/outline",
            "templates": "/v1/templates",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    registry = get_converter().registry
    return {
        "status": "healthy",
        "templates": len(registry.list_names()),
    }
