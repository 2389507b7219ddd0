#------------------------------------------------------------
#                     verifier_service.py
#       Optionally asks an LLM whether the evidence backs
#                    each recommended skill.

import json
from dataclasses import replace
from typing import List, Optional, Sequence
import requests
from ..config import AI_REQUEST_TIMEOUT_SECONDS, DEFAULT_OPENAI_API_URL, DEFAULT_OPENAI_MODEL
from ..logger import get_logger
from ..models import Evidence, SkillRecommendation, VerificationResult

DISABLED_CONFIDENCE = 0.5
DISABLED_REASONING = "AI not enabled"
FAILED_REASONING = "AI verification failed"
MISSING_KEY_MESSAGE = "AI verification requested but no API key - disabled"
VERIFY_FAILED_MESSAGE = "AI verification failed for %s: %s"

SYSTEM_PROMPT = (
    "You review evidence of a developer's skills. Reply with a JSON object "
    '{"verified": true|false, "confidence": <number 0-1>, "reasoning": "<short reason>"}.'
)
USER_PROMPT_TEMPLATE = "Skill: {skill}\nEvidence:\n{evidence}"
EVIDENCE_LINE_TEMPLATE = "- [{kind}] {description}"

logger = get_logger(__name__)

class AIVerifier:

    def __init__(
        self,
        api_key: Optional[str],
        enabled: bool,
        api_url: str = DEFAULT_OPENAI_API_URL,
        model: str = DEFAULT_OPENAI_MODEL,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url
        self.model = model
        self.api_key = api_key
        self.enabled = bool(enabled and api_key)
        if enabled and not api_key:
            logger.warning(MISSING_KEY_MESSAGE)
        self.session = session or requests.Session()

    def is_enabled(self) -> bool:
        return self.enabled

    # This function does verify one skill against its evidence.
    # Any transport or parsing problem yields an unverified neutral result.
    def verify_skill(self, skill_name: str, evidence: Sequence[Evidence]) -> VerificationResult:
        if not self.enabled:
            return VerificationResult(verified=True, confidence=DISABLED_CONFIDENCE, reasoning=DISABLED_REASONING)

        prompt = USER_PROMPT_TEMPLATE.format(
            skill=skill_name,
            evidence="\n".join(
                EVIDENCE_LINE_TEMPLATE.format(kind=item.kind, description=item.description) for item in evidence
            ),
        )
        try:
            response = self.session.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={
                    "model": self.model,
                    "messages": [
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": prompt},
                    ],
                    "response_format": {"type": "json_object"},
                },
                timeout=AI_REQUEST_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            content = response.json()["choices"][0]["message"]["content"]
            return parse_verification(content)
        except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as exc:
            logger.warning(VERIFY_FAILED_MESSAGE, skill_name, exc)
            return VerificationResult(verified=False, confidence=DISABLED_CONFIDENCE, reasoning=FAILED_REASONING)

    # This function does attach verification results to recommendations.
    # Base confidence and evidence are carried over unchanged.
    def apply_verification(self, recommendations: Sequence[SkillRecommendation]) -> List[SkillRecommendation]:
        verified = []
        for recommendation in recommendations:
            result = self.verify_skill(recommendation.skill.name, recommendation.evidence)
            verified.append(
                replace(recommendation, ai_verified=result.verified, ai_confidence=result.confidence)
            )
        return verified


def parse_verification(content: str) -> VerificationResult:
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError("verification reply is not a JSON object")
    confidence = float(data.get("confidence", DISABLED_CONFIDENCE))
    return VerificationResult(
        verified=bool(data.get("verified", False)),
        confidence=max(0.0, min(1.0, confidence)),
        reasoning=str(data.get("reasoning") or ""),
    )
