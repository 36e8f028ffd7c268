"""
FastAPI server exposing the relational algebra engine as a REST API.
"""

from fastapi import FastAPI, HTTPException, Body
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Any, Dict, List, Union

from relalg.bank import build_bank
from relalg.condition import strip_quotes
from relalg.diagnostics import diagnostics
from relalg.engine import DatabaseEngine
from relalg.errors import RelAlgError, UnknownTable
from relalg.table import Table

app = FastAPI(title="Relational Algebra API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize engine
engine = DatabaseEngine()


# Pydantic models for request validation
class TableCreate(BaseModel):
    name: str
    attributes: str
    domains: str
    key: str = ""


class RowInsert(BaseModel):
    values: List[Union[int, float, str]]


def _table_payload(table: Table) -> Dict[str, Any]:
    return {
        "name": table.name,
        "columns": list(table.attributes),
        "domains": [d.value for d in table.domains],
        "key": list(table.key),
        "rows": [list(t) for t in table.rows],
    }


def _error(e: Exception) -> HTTPException:
    if isinstance(e, UnknownTable):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


# ========== ENDPOINTS ==========

@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Relational Algebra API",
        "version": "1.0.0",
        "endpoints": {
            "GET /tables": "List all tables",
            "POST /tables": "Create a table",
            "GET /tables/{name}": "Get table schema and rows",
            "POST /tables/{name}/rows": "Insert a row",
            "POST /query": "Execute a statement",
            "POST /bank": "Load the bank tables"
        }
    }


@app.get("/tables")
async def list_tables():
    """List all tables in the catalog."""
    return {"tables": engine.list_tables()}


@app.post("/tables")
async def create_table(spec: TableCreate):
    """Create an empty table from specification strings."""
    if spec.name in engine.list_tables():
        raise HTTPException(status_code=400, detail=f"Table '{spec.name}' already exists")
    try:
        table = Table(spec.name, spec.attributes, spec.domains, spec.key, engine.executor.namer)
    except RelAlgError as e:
        raise _error(e)

    engine.register(table)
    return {"status": "OK", "message": f"Table '{spec.name}' created successfully"}


@app.get("/tables/{table_name}")
async def get_table(table_name: str):
    """Get schema information and rows of a table."""
    try:
        info = engine.get_table_info(table_name)
        info["rows"] = [list(t) for t in engine.get_table(table_name).rows]
        return info
    except RelAlgError as e:
        raise _error(e)


@app.post("/tables/{table_name}/rows")
async def insert_row(table_name: str, row: RowInsert):
    """
    Insert a row. String values are parsed into non-string domains, so
    both ["Alps", 903, "Paul", 3000.0] and ["Alps", "903", "Paul", "3000.0"]
    are accepted.
    """
    try:
        table = engine.get_table(table_name)
        if len(row.values) != len(table.attributes):
            raise HTTPException(
                status_code=400,
                detail=f"Value count ({len(row.values)}) doesn't match attribute count ({len(table.attributes)})")

        values = tuple(
            domain.parse(strip_quotes(v)) if isinstance(v, str) else
            float(v) if domain.family == "floating" else v
            for domain, v in zip(table.domains, row.values)
        )
        with diagnostics.raising():
            table.insert(values)
    except RelAlgError as e:
        raise _error(e)

    return {"status": "OK", "row_count": len(table)}


@app.post("/query")
async def execute_query(query: Dict[str, Any] = Body(...)):
    """Execute a statement and return its result table, if any."""
    if "query" not in query:
        raise HTTPException(status_code=400, detail="Query string is required")

    try:
        result = engine.execute(query["query"])
    except (SyntaxError, ValueError, RelAlgError) as e:
        raise _error(e)

    if "table" in result:
        result["table"] = _table_payload(result["table"])
    return result


@app.post("/bank")
async def load_bank():
    """Load the branch, customer, deposit and loan tables."""
    loaded = []
    for name, table in build_bank(engine.executor.namer).items():
        if name not in engine.list_tables():
            engine.register(table)
            loaded.append(name)
    return {"status": "OK", "loaded": loaded}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
