import re

from exceptions import ValidationException

MAX_CLAIM_LENGTH = 5000

class InputValidator:

    SCRIPT_PATTERNS = [
        re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL),
        re.compile(r"javascript:", re.IGNORECASE),
        re.compile(r"<iframe", re.IGNORECASE),
    ]

    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

    @staticmethod
    def sanitize_claim(claim: str) -> str:
        """Trim and clean a claim before it reaches the agent.

        Wording is left untouched so the verdict can echo it back.
        """
        if claim is None or not claim.strip():
            raise ValidationException("claim", "Claim is required")

        claim = InputValidator.CONTROL_CHARS_PATTERN.sub('', claim).strip()

        if not claim:
            raise ValidationException("claim", "Claim is required")

        if len(claim) > MAX_CLAIM_LENGTH:
            raise ValidationException("claim", f"Claim cannot exceed {MAX_CLAIM_LENGTH} characters")

        for pattern in InputValidator.SCRIPT_PATTERNS:
            if pattern.search(claim):
                raise ValidationException("claim", "Claim contains suspicious HTML/JavaScript patterns")

        return claim
