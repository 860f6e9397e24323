from typing import Iterable, List


def is_new_phrase(phrases: List[str], text: str) -> bool:
    """True when `text` is non-empty and not a case-insensitive repeat of the last phrase."""
    if not text:
        return False
    if not phrases:
        return True
    return phrases[-1].lower() != text.lower()


def append_phrase(phrases: List[str], text: str) -> bool:
    if is_new_phrase(phrases, text):
        phrases.append(text)
        return True
    return False


def accumulate(results: Iterable[str]) -> List[str]:
    phrases: List[str] = []
    for text in results:
        append_phrase(phrases, text)
    return phrases
