"""약물 상호작용 검사 API"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from adhddb.api.deps import get_catalog, get_locale
from adhddb.i18n import resolve_text
from adhddb.i18n.messages import INTERACTION_DISCLAIMER
from adhddb.interactions import CLASS_INTERACTIONS, check_interactions
from adhddb.store import DrugCatalog

router = APIRouter()

USAGE = {
    "multiDrug": "/api/v1/interactions/check?drugs=methylphenidate,guanfacine",
    "drugClass": "/api/v1/interactions/check?drugs=methylphenidate&class=SSRI",
    "nutrientInfo": "/api/v1/interactions/check?drugs=amphetamine-mixed-salts",
}

MISSING_MESSAGE = (
    "Use ?drugs=drug1,drug2 to check interactions between drugs, "
    "or ?drugs=drug&class=SSRI to check drug class interactions"
)


@router.get("/check")
def check(
    drugs: Optional[str] = None,
    drug_class: Optional[str] = Query(default=None, alias="class"),
    lang: str = Depends(get_locale),
    catalog: DrugCatalog = Depends(get_catalog),
):
    """
    상호작용 검사

    drugs(쉼표 구분)와 class 둘 다 없으면 사용법과 선택 가능한 값을 400으로 돌려준다.
    """
    if not drugs and not drug_class:
        return JSONResponse(status_code=400, content={
            "error": "Missing parameter",
            "message": MISSING_MESSAGE,
            "usage": USAGE,
            "availableDrugs": [
                {"id": d.id, "name": resolve_text(d.generic_name, lang)}
                for d in catalog.drugs
            ],
            "availableClasses": list(CLASS_INTERACTIONS),
        })

    report = check_interactions(
        catalog,
        (drugs or "").split(","),
        check_class=drug_class,
        locale=lang,
    )

    data = report.to_dict()
    data["metadata"] = {
        "source": "ADHD-DB Drug Interaction Database",
        "lastUpdated": datetime.now(timezone.utc).isoformat(),
        "disclaimer": INTERACTION_DISCLAIMER,
    }
    return {"data": data}
