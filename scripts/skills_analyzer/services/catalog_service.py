#------------------------------------------------------------
#                      catalog_service.py
#          Fetches the standardized skill catalog and
#              caches it for one analysis run.

from typing import Callable, Iterable, List, Optional, Sequence
import requests
from ..config import (
    DEFAULT_TOPCODER_API_URL,
    TOPCODER_REQUEST_TIMEOUT_SECONDS,
    TOPCODER_SKILLS_ENDPOINT,
)
from ..logger import get_logger
from ..models import SkillRecord

FETCH_SKILLS_MESSAGE = "Fetching skill catalog from %s"
FETCHED_SKILLS_MESSAGE = "Fetched %d skills"
FETCH_FAILED_MESSAGE = "Failed to fetch skill catalog: %s"
FALLBACK_SKILLS_MESSAGE = "Skill catalog unavailable, using %d fallback skills"

# Shorter labels like "C" or "R" would match almost any catalog name.
MIN_CONTAINS_LENGTH = 2

logger = get_logger(__name__)

# This function does pull the skill list out of a catalog payload.
# Catalog versions wrap the list differently, so all known shapes are accepted.
def extract_skill_items(payload) -> List[dict]:
    if isinstance(payload, list):
        return [item for item in payload if isinstance(item, dict)]
    if not isinstance(payload, dict):
        return []
    result = payload.get("result")
    if isinstance(result, dict):
        payload = result
    for key in ("content", "skills", "data"):
        items = payload.get(key)
        if isinstance(items, list):
            return [item for item in items if isinstance(item, dict)]
    return []

# This function does convert a raw catalog entry into a SkillRecord.
# It returns None for entries without a usable name.
def to_skill_record(item: dict) -> Optional[SkillRecord]:
    name = str(item.get("name") or "").strip()
    if not name:
        return None
    category = item.get("category")
    if isinstance(category, dict):
        category = category.get("name")
    return SkillRecord(
        id=str(item.get("id") or name),
        name=name,
        category=str(category).strip() if category else None,
    )


def to_skill_records(items: Iterable[dict]) -> List[SkillRecord]:
    records = (to_skill_record(item) for item in items)
    return [record for record in records if record is not None]

class TopcoderService:

    def __init__(
        self,
        api_url: str = DEFAULT_TOPCODER_API_URL,
        timeout: float = TOPCODER_REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # This function does fetch every standardized skill.
    # Network and decoding failures degrade to an empty list.
    def fetch_skills(self) -> List[SkillRecord]:
        url = f"{self.api_url}{TOPCODER_SKILLS_ENDPOINT}"
        logger.info(FETCH_SKILLS_MESSAGE, url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning(FETCH_FAILED_MESSAGE, exc)
            return []

        skills = to_skill_records(extract_skill_items(payload))
        logger.info(FETCHED_SKILLS_MESSAGE, len(skills))
        return skills

# Run-scoped skill cache with a two-tier name lookup. The catalog is fetched
# on first use and never invalidated; an empty fetch falls back to the bundled list.
class SkillCatalog:

    def __init__(
        self,
        fetch_skills: Callable[[], Sequence[SkillRecord]],
        fallback_skills: Sequence[SkillRecord] = (),
    ):
        self._fetch_skills = fetch_skills
        self._fallback_skills = tuple(fallback_skills)
        self._skills: Optional[List[SkillRecord]] = None

    def list_all_skills(self) -> List[SkillRecord]:
        if self._skills is None:
            skills = list(self._fetch_skills() or [])
            if not skills and self._fallback_skills:
                logger.warning(FALLBACK_SKILLS_MESSAGE, len(self._fallback_skills))
                skills = list(self._fallback_skills)
            self._skills = skills
        return self._skills

    # Exact, case-insensitive.
    def find_skill_by_name(self, name: str) -> Optional[SkillRecord]:
        wanted = (name or "").strip().lower()
        if not wanted:
            return None
        for skill in self.list_all_skills():
            if skill.name.lower() == wanted:
                return skill
        return None

    # Catalog name contains the wanted name, case-insensitive; first in catalog order wins.
    def find_skill_containing(self, name: str) -> Optional[SkillRecord]:
        wanted = (name or "").strip().lower()
        if len(wanted) < MIN_CONTAINS_LENGTH:
            return None
        for skill in self.list_all_skills():
            if wanted in skill.name.lower():
                return skill
        return None

    def resolve(self, name: str) -> Optional[SkillRecord]:
        return self.find_skill_by_name(name) or self.find_skill_containing(name)
