from skillbench.skills.integrity import check_catalog, validate
from skillbench.skills.loader import load_catalog, load_validated_catalog
from skillbench.skills.ranker import recommend
from skillbench.skills.store import SkillStore, SqlAlchemyStore
from skillbench.skills.types import RecommendationResult, SkillCatalog

__all__ = [
    "SkillCatalog",
    "RecommendationResult",
    "SkillStore",
    "SqlAlchemyStore",
    "load_catalog",
    "load_validated_catalog",
    "validate",
    "check_catalog",
    "recommend",
]
