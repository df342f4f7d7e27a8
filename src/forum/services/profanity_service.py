# profanity_service.py

import logging
import re
from dataclasses import dataclass

import requests
from django.conf import settings

from forum.exceptions import ProfanityCheckError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfanityResult:
    has_profanity: bool
    censored_text: str


class ProfanityService:
    """
    Gate for new forum content.

    Checks the local banned-word list first, then the external profanity
    filter API when one is configured.
    """

    def __init__(self):
        self.banned_words = [
            w for w in getattr(settings, "BANNED_WORDS", []) if w and w.strip()
        ]
        self.api_url = getattr(settings, "PROFANITY_API_URL", "")
        self.api_key = getattr(settings, "PROFANITY_API_KEY", "")
        self.timeout = getattr(settings, "PROFANITY_TIMEOUT", 10)

    def check(self, text: str) -> ProfanityResult:
        """
        Check text for profanity.

        Args:
            text: Content to check

        Returns:
            ProfanityResult with the censored text

        Raises:
            ProfanityCheckError: The external API could not be reached or
                answered with something unexpected
        """
        if not text:
            return ProfanityResult(has_profanity=False, censored_text="")

        local_result = self._check_local_rules(text)
        if local_result.has_profanity:
            return local_result

        if self.api_url and self.api_key:
            return self._check_external_api(text)

        return local_result

    def _check_local_rules(self, text: str) -> ProfanityResult:
        censored = text
        found = False
        for word in self.banned_words:
            pattern = re.compile(r"\b" + re.escape(word.strip()) + r"\b", re.IGNORECASE)
            if pattern.search(censored):
                found = True
                censored = pattern.sub(lambda m: "*" * len(m.group(0)), censored)
        return ProfanityResult(has_profanity=found, censored_text=censored)

    def _check_external_api(self, text: str) -> ProfanityResult:
        try:
            response = requests.get(
                self.api_url,
                params={"text": text},
                headers={"X-Api-Key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Profanity API check failed: {e}")
            raise ProfanityCheckError() from e

        if "has_profanity" not in data:
            logger.warning(f"Unexpected profanity API response: {data}")
            raise ProfanityCheckError()

        return ProfanityResult(
            has_profanity=bool(data["has_profanity"]),
            censored_text=data.get("censored", text),
        )
