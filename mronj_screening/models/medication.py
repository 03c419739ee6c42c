"""
Catalog of bone-modifying drugs offered on the medication-history form.
Informational only: the risk engine keys on the antiresorptive flag and dates.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class AdministrationRoute(str, Enum):
    ORAL = "口服"
    INJECTION = "注射"


class Indication(str, Enum):
    OSTEOPOROSIS = "骨質疏鬆"
    MULTIPLE_MYELOMA = "多發性骨髓瘤"
    BONE_METASTASIS = "骨轉移"
    OTHER = "其他"


class Frequency(str, Enum):
    DAILY = "每天"
    MONTHLY = "每個月"
    HALF_YEARLY = "每半年"


@dataclass(frozen=True)
class CatalogDrug:
    """藥物目錄項目."""
    name: str                    # 保骼麗注射液Prolia
    group: str                   # 單株抗體藥物
    route: AdministrationRoute


DRUG_GROUPS: Dict[str, List[CatalogDrug]] = {
    "雙磷酸鹽類藥物": [
        CatalogDrug("福善美保骨錠Fosamax Plus", "雙磷酸鹽類藥物", AdministrationRoute.ORAL),
        CatalogDrug("瑞谷卓膜衣錠Reosteo", "雙磷酸鹽類藥物", AdministrationRoute.ORAL),
        CatalogDrug("骨維壯注射劑Boniva", "雙磷酸鹽類藥物", AdministrationRoute.INJECTION),
    ],
    "單株抗體藥物": [
        CatalogDrug("保骼麗注射液Prolia", "單株抗體藥物", AdministrationRoute.INJECTION),
    ],
    "其他骨質疏鬆藥物": [
        CatalogDrug("鈣穩膜衣錠Evista", "其他骨質疏鬆藥物", AdministrationRoute.ORAL),
        CatalogDrug("骨穩Forteo", "其他骨質疏鬆藥物", AdministrationRoute.INJECTION),
        CatalogDrug("益穩挺Evenity", "其他骨質疏鬆藥物", AdministrationRoute.INJECTION),
    ],
}


def all_drugs() -> List[CatalogDrug]:
    """Get every catalog drug in form display order."""
    return [drug for drugs in DRUG_GROUPS.values() for drug in drugs]


def lookup_drug(name: str) -> Optional[CatalogDrug]:
    """
    Find a catalog drug by exact name, or by its Latin brand suffix.

    Example:
        >>> lookup_drug("prolia").route
        <AdministrationRoute.INJECTION: '注射'>
    """
    needle = (name or "").strip().casefold()
    if not needle:
        return None

    for drug in all_drugs():
        if drug.name.casefold() == needle:
            return drug
    for drug in all_drugs():
        if drug.name.casefold().endswith(needle):
            return drug
    return None
