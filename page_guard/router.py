"""
Router FastAPI — pré-validation sans état (aucun stockage, aucune authentification).

POST /page-guard/validate  → {tier, existing?, proposed} → UpdateDecision (toujours 200)
POST /page-guard/enforce   → idem ; 200 + document fusionné, 403 (structure) ou 422 (grammaire/invariants)
GET  /page-guard/catalog   → blocs disponibles (filtrés par tier) + JSON schemas des payloads
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from .catalog import BLOCK_SPECS, blocks_for_tier
from .core.schemas import PageUpdate
from .core.tiers import Tier
from .service import UpdateDecision, evaluate_update

router = APIRouter(prefix="/page-guard", tags=["page_guard"])


class ValidateRequest(BaseModel):
    tier:     Tier
    existing: Optional[Dict[str, Any]] = None    # snapshot brut : ses erreurs sont rapportées sous `existing.`
    proposed: PageUpdate = Field(default_factory=PageUpdate)


def _dump(decision: UpdateDecision) -> Dict[str, Any]:
    return decision.model_dump(by_alias=True, mode="json", exclude_none=True)


def raise_for_decision(decision: UpdateDecision) -> None:
    """Violations → HTTPException : structure = 403, grammaire/invariants = 422."""
    if decision.accepted:
        return
    status = 403 if all(v.category == "structure" for v in decision.violations) else 422
    raise HTTPException(status, detail={
        "message":    decision.violations[0].message,
        "violations": _dump(decision)["violations"],
    })


@router.post("/validate", summary="Valide un update sans l'appliquer")
def validate(req: ValidateRequest) -> Dict[str, Any]:
    decision = evaluate_update(req.existing, req.proposed, req.tier)
    return {"valid": decision.accepted, **_dump(decision)}


@router.post("/enforce", summary="Valide un update et retourne le document à persister")
def enforce(req: ValidateRequest) -> Dict[str, Any]:
    decision = evaluate_update(req.existing, req.proposed, req.tier)
    raise_for_decision(decision)
    return {"success": True, "document": decision.document.to_wire()}


@router.get("/catalog", summary="Liste les blocs disponibles et leurs schemas")
def catalog(tier: Optional[Tier] = Query(None, description="Filtrer par tier")) -> Dict[str, List[Dict[str, Any]]]:
    specs = blocks_for_tier(tier) if tier is not None else list(BLOCK_SPECS.values())
    return {
        "blocks": [
            {**spec.model_dump(mode="json"), "schema": spec.data_schema()}
            for spec in specs
        ]
    }
