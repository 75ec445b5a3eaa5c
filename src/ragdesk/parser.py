"""Parsing of the language model's labelled answer format."""

import re

from pydantic import BaseModel

from ragdesk.models import ParsedAnswer

FALLBACK_CONFIDENCE = 5
FALLBACK_REASONING = "Answer based on analysis of the available documents"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class ResponseLabels(BaseModel):
    """Line prefixes the model is instructed to emit. Matched case-sensitively."""

    answer: str = "ANSWER:"
    confidence: str = "CONFIDENCE:"
    reasoning: str = "REASONING:"


class ResponseParser:
    """Extracts answer, confidence and reasoning from a model response.

    A line starting with a label opens that section; following non-empty
    lines without a label are appended to the open answer or reasoning
    section. If no label appears at all, the whole response becomes the
    answer with a neutral confidence, so output is never dropped.

    Example:
        ResponseParser().parse("ANSWER: X\\nCONFIDENCE: 7\\nREASONING: Y")
        # ParsedAnswer(answer='X', confidence=7, reasoning='Y', structured=True)
    """

    def __init__(self, labels: ResponseLabels | None = None) -> None:
        self.labels = labels or ResponseLabels()

    def parse(self, text: str) -> ParsedAnswer:
        sections: dict[str, list[str]] = {"answer": [], "reasoning": []}
        confidence = 0
        current: str | None = None

        for line in (raw.strip() for raw in text.splitlines()):
            if line.startswith(self.labels.answer):
                current = "answer"
                sections["answer"] = [line[len(self.labels.answer) :].strip()]
            elif line.startswith(self.labels.confidence):
                current = "confidence"
                confidence = _parse_confidence(line[len(self.labels.confidence) :])
            elif line.startswith(self.labels.reasoning):
                current = "reasoning"
                sections["reasoning"] = [line[len(self.labels.reasoning) :].strip()]
            elif line and current in sections:
                sections[current].append(line)

        if current is None:
            return ParsedAnswer(
                answer=text.strip(),
                confidence=FALLBACK_CONFIDENCE,
                reasoning=FALLBACK_REASONING,
                structured=False,
            )

        return ParsedAnswer(
            answer=_join(sections["answer"]),
            confidence=confidence,
            reasoning=_join(sections["reasoning"]),
        )


def _parse_confidence(value: str) -> int:
    """Leading integer of value, clamped to 0-10. Non-numeric gives 0."""
    match = _LEADING_INT.match(value)
    if match is None:
        return 0
    return min(max(int(match.group(1)), 0), 10)


def _join(parts: list[str]) -> str:
    return " ".join(p for p in parts if p)
