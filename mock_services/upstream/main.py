"""Mock user/asset/housing/loan services serving JSON stubs for local runs and e2e tests"""

from fastapi import FastAPI, Header, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Upstream Services", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/upstream_stub") if os.path.exists("/upstream_stub") else Path(__file__).resolve().parents[1] / "upstream_stub"


def _load(name: str) -> dict:
    return json.loads((DATA_DIR / f"{name}.json").read_text(encoding="utf-8"))


def _envelope(data) -> JSONResponse:
    return JSONResponse(content={"success": True, "message": "OK", "data": data})


@app.get("/health")
def health(): return {"status": "ok"}


def _total(records: list, key: str) -> int:
    return sum(item["amount"] for record in records for item in record.get(key, []))


@app.get("/api/v1/assets/users/{user_id}")
def get_assets(user_id: str):
    assets = _load("assets")
    if user_id not in assets:
        raise HTTPException(status_code=404, detail="asset info not found")

    records = assets[user_id]
    summary = {
        "totalAssets": _total(records, "assets"),
        "totalLoans": _total(records, "loans"),
        "totalMonthlyIncome": _total(records, "monthlyIncomes"),
        "totalMonthlyExpense": _total(records, "monthlyExpenses"),
    }
    summary["netAssets"] = summary["totalAssets"] - summary["totalLoans"]
    summary["monthlyAvailableFunds"] = summary["totalMonthlyIncome"] - summary["totalMonthlyExpense"]
    return _envelope({"assets": records, "combinedSummary": summary})


@app.get("/housings/{housing_id}")
def get_housing(housing_id: str):
    housings = _load("housings")
    if housing_id not in housings:
        raise HTTPException(status_code=404, detail="housing not found")
    return _envelope(housings[housing_id])


@app.get("/api/v1/loans/{loan_id}")
def get_loan(loan_id: str):
    loans = _load("loans")
    if loan_id not in loans:
        raise HTTPException(status_code=404, detail="loan product not found")
    return _envelope(loans[loan_id])


@app.get("/users/profile")
def get_user_profile(x_user_id: str = Header(...)):
    users = _load("users")
    if x_user_id not in users:
        raise HTTPException(status_code=404, detail="user not found")
    return _envelope(users[x_user_id])


@app.get("/users/household/members")
def get_household_members(x_user_id: str = Header(...)):
    for household in _load("households").values():
        if any(m["userId"] == x_user_id for m in household):
            return _envelope({"members": household})
    return _envelope({"members": []})
