"""Lightweight tokenizer and number extractor used by the query translator.

The translator only depends on the ``Tagger`` protocol below, so a heavier
linguistic backend can be swapped in without touching the rule set.
"""
import math
import re
from typing import List, Optional, Protocol, Sequence, Union

Number = Union[int, float]

_TOKEN = re.compile(r"\d+(?:\.\d+)?|[a-z]+(?:'[a-z]+)?")
_DIGITS = re.compile(r'^\d+(?:\.\d+)?$')

_NUM_WORDS = {
    'zero': 0,
    'one': 1,
    'two': 2,
    'three': 3,
    'four': 4,
    'five': 5,
    'six': 6,
    'seven': 7,
    'eight': 8,
    'nine': 9,
    'ten': 10,
    'eleven': 11,
    'twelve': 12,
    'thirteen': 13,
    'fourteen': 14,
    'fifteen': 15,
    'sixteen': 16,
    'seventeen': 17,
    'eighteen': 18,
    'nineteen': 19,
    'twenty': 20,
    'thirty': 30,
    'forty': 40,
    'fifty': 50,
    'sixty': 60,
    'seventy': 70,
    'eighty': 80,
    'ninety': 90,
}


class Tagger(Protocol):
    def tag(self, text: str) -> List[str]:
        """Split ``text`` into an ordered list of lowercase tokens."""
        ...

    def extract_numbers(self, text: str) -> List[Number]:
        """Return the numeric values found in ``text``, in order."""
        ...


def lemma(token: str) -> str:
    """Crude singular form: 'palindromes' -> 'palindrome', 'words' -> 'word'."""
    if len(token) > 3 and token.endswith('s') and not token.endswith('ss'):
        return token[:-1]
    return token


def has_phrase(tokens: Sequence[str], phrase: str) -> bool:
    """True if the words of ``phrase`` appear consecutively in ``tokens``."""
    words = [lemma(w) for w in phrase.lower().split()]
    if not words:
        return False
    lemmas = [lemma(t) for t in tokens]
    n = len(words)
    return any(lemmas[i:i + n] == words for i in range(len(lemmas) - n + 1))


def _word_to_int(s: str) -> Optional[int]:
    """Convert a single number word to an int."""
    return _NUM_WORDS.get(s.strip().lower())


def _parse_digits(token: str) -> Optional[Number]:
    """Convert a digit token; None when it is too long to represent."""
    if '.' in token:
        value = float(token)
        return value if math.isfinite(value) else None
    try:
        return int(token)
    except ValueError:
        return None


class RegexTagger:
    """Default tagger: regex tokens plus digit and English number-word parsing.

    Adjacent number words are folded together, so "twenty five" yields 25
    and "one hundred" yields 100.
    """

    def tag(self, text: str) -> List[str]:
        return _TOKEN.findall(text.lower())

    def extract_numbers(self, text: str) -> List[Number]:
        numbers: List[Number] = []
        pending: Optional[int] = None

        for token in self.tag(text):
            if _DIGITS.match(token):
                if pending is not None:
                    numbers.append(pending)
                    pending = None
                value = _parse_digits(token)
                if value is not None:
                    numbers.append(value)
                continue

            if token == 'hundred' and pending is not None:
                pending *= 100
                continue

            n = _word_to_int(token)
            if n is None:
                if pending is not None:
                    numbers.append(pending)
                    pending = None
                continue

            if pending is not None and pending >= 20 and pending % 10 == 0 and 0 < n < 10:
                pending += n
            elif pending is not None and pending % 100 == 0 and pending >= 100 and n < 100:
                pending += n
            else:
                if pending is not None:
                    numbers.append(pending)
                pending = n

        if pending is not None:
            numbers.append(pending)
        return numbers


default_tagger = RegexTagger()
