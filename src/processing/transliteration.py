"""
Devanagari -> Latin romanization for Hindi output ("Roman Hindi").

Rules are applied top to bottom. Whole words and conjuncts come before the
letters they are built from, otherwise the letter rules would consume them.
"""
from typing import List, Tuple

ROMAN_HINDI_RULES: List[Tuple[str, str]] = [
    # whole words
    ("नहीं", "nahi"),
    ("है", "hai"),
    # conjuncts
    ("क्ष", "ksh"),
    ("ज्ञ", "gya"),
    ("त्र", "tra"),
    # independent vowels
    ("अ", "a"),
    ("आ", "aa"),
    ("इ", "i"),
    ("ई", "ee"),
    ("उ", "u"),
    ("ऊ", "oo"),
    ("ए", "e"),
    ("ऐ", "ai"),
    ("ओ", "o"),
    ("औ", "au"),
    # consonants
    ("क", "k"),
    ("ख", "kh"),
    ("ग", "g"),
    ("घ", "gh"),
    ("च", "ch"),
    ("छ", "chh"),
    ("ज", "j"),
    ("झ", "jh"),
    ("ट", "t"),
    ("ठ", "th"),
    ("ड", "d"),
    ("ढ", "dh"),
    ("ण", "n"),
    ("त", "t"),
    ("थ", "th"),
    ("द", "d"),
    ("ध", "dh"),
    ("न", "n"),
    ("प", "p"),
    ("फ", "ph"),
    ("ब", "b"),
    ("भ", "bh"),
    ("म", "m"),
    ("य", "y"),
    ("र", "r"),
    ("ल", "l"),
    ("व", "v"),
    ("श", "sh"),
    ("ष", "sh"),
    ("स", "s"),
    ("ह", "h"),
    # signs
    ("ं", "n"),
    ("ँ", "n"),
    ("ः", "h"),
    ("़", ""),
    # vowel signs
    ("ा", "aa"),
    ("ि", "i"),
    ("ी", "ee"),
    ("ु", "u"),
    ("ू", "oo"),
    ("े", "e"),
    ("ै", "ai"),
    ("ो", "o"),
    ("ौ", "au"),
    ("्", ""),
    # punctuation
    ("।", "."),
]


def to_roman_hindi(text: str) -> str:
    out = text or ""
    for pattern, replacement in ROMAN_HINDI_RULES:
        out = out.replace(pattern, replacement)
    return out
