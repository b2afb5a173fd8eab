import re
from typing import List

MAX_TAGS = 3

# Evaluated in order; the first three distinct matches win.
TAG_RULES = [
    (re.compile(r"\bfix(es|ed)?\b|\bbug\b", re.IGNORECASE), "fix"),
    (re.compile(r"\bfeat(ure)?\b", re.IGNORECASE), "feature"),
    (re.compile(r"\bdocs?\b|\bdocumentation\b", re.IGNORECASE), "docs"),
    (re.compile(r"\brefactor\b", re.IGNORECASE), "refactor"),
    (re.compile(r"\btest(s|ing)?\b", re.IGNORECASE), "test"),
    (re.compile(r"\bchore\b", re.IGNORECASE), "chore"),
    (re.compile(r"\bperf(ormance)?\b", re.IGNORECASE), "performance"),
    (re.compile(r"\bstyle\b", re.IGNORECASE), "style"),
    (re.compile(r"\bsecurity\b", re.IGNORECASE), "security"),
]


def extract_tags(text: str) -> List[str]:
    """Classify free text (commit messages, PR/issue bodies) into at most three tags."""
    tags: List[str] = []
    if not text:
        return tags

    for pattern, tag in TAG_RULES:
        if tag not in tags and pattern.search(text):
            tags.append(tag)
        if len(tags) == MAX_TAGS:
            break

    return tags
