# phl_dashboard/data_processing/ordering.py
# PHL DASHBOARD - FACILITY ORDERING & THAI COLLATION

"""
Facility ordering rules shared by the pivot tables.

Thai strings are compared the way Thai dictionaries (and ICU's `th` locale)
order them: a leading vowel (เ แ โ ใ ไ) is sorted after the consonant it
precedes, and tone marks only break ties between otherwise equal words.
"""

import logging
import unicodedata
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

import pandas as pd

logger = logging.getLogger(__name__)

_LEADING_VOWELS = frozenset("เแโใไ")
# Mai taikhu, the four tone marks, thanthakhat and yamakkan.
_TONE_MARKS = frozenset("็่้๊๋์๎")


def _is_thai_consonant(ch: str) -> bool:
    return "ก" <= ch <= "ฮ"


def _swap_leading_vowels(text: str) -> str:
    chars = list(text)
    out: List[str] = []
    i = 0
    while i < len(chars):
        ch = chars[i]
        if ch in _LEADING_VOWELS and i + 1 < len(chars) and _is_thai_consonant(chars[i + 1]):
            out.extend((chars[i + 1], ch))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _script_rank(ch: str) -> int:
    if ch.isdigit():
        return 0
    return 1 if "\u0e00" <= ch <= "\u0e7f" else 2


def _is_ignorable(ch: str) -> bool:
    return unicodedata.category(ch)[0] in "PSZC"


def thai_sort_key(name: Any) -> Tuple[Tuple[Tuple[int, str], ...], str, str]:
    """
    Sort key approximating Thai-locale collation; None sorts as an empty string.

    Punctuation and whitespace are skipped at the first level, so "รพ.วังทอง"
    sorts after "รพร.นครไทย". Digits come before Thai letters and Thai letters
    before Latin ones.
    """
    if name is None or (isinstance(name, float) and pd.isna(name)):
        return ((), "", "")
    swapped = _swap_leading_vowels(str(name).strip())
    letters = "".join(ch for ch in swapped if not _is_ignorable(ch))
    primary = tuple((_script_rank(ch), ch.casefold()) for ch in letters if ch not in _TONE_MARKS)
    return (primary, letters, swapped)


def _volume_of(volume: Union[Mapping[str, Any], pd.Series], code: str) -> float:
    value = volume.get(code) if hasattr(volume, "get") else None
    number = pd.to_numeric(value, errors="coerce") if value is not None else None
    return 0.0 if number is None or pd.isna(number) else float(number)


def sort_facilities_by_volume(
    hospitals: pd.DataFrame,
    volume: Union[Mapping[str, Any], pd.Series],
    key: str = "hoscode",
    name_col: str = "hosname",
) -> pd.DataFrame:
    """
    Orders the facility master list for a pivot table.

    Facilities with a positive volume come first, largest first; facilities
    with zero or no volume follow strictly after. Remaining ties are broken by
    Thai-locale name order. Every facility in `hospitals` is kept.
    """
    if not isinstance(hospitals, pd.DataFrame) or hospitals.empty:
        return pd.DataFrame() if not isinstance(hospitals, pd.DataFrame) else hospitals.copy()

    codes = hospitals[key].tolist()
    names = hospitals[name_col].tolist() if name_col in hospitals.columns else codes

    def rank(i: int):
        v = _volume_of(volume, codes[i])
        has_volume = v > 0
        return (0 if has_volume else 1, -v if has_volume else 0.0, thai_sort_key(names[i]), str(codes[i]))

    order = sorted(range(len(codes)), key=rank)
    return hospitals.iloc[order].reset_index(drop=True)


def sort_facilities_by_year_presence(
    hospitals: pd.DataFrame,
    presence: Mapping[str, Set[Any]],
    years: Sequence[Any],
    key: str = "hoscode",
    name_col: str = "hosname",
) -> pd.DataFrame:
    """
    Orders facilities by whether they have data in each of `years`, checked in
    the given order (most recent first), then by Thai-locale name.
    """
    if hospitals.empty:
        return hospitals.copy()
    codes = hospitals[key].tolist()
    names = hospitals[name_col].tolist() if name_col in hospitals.columns else codes

    def rank(i: int):
        have = presence.get(codes[i], set())
        return tuple(0 if y in have else 1 for y in years) + (thai_sort_key(names[i]),)

    order = sorted(range(len(codes)), key=rank)
    return hospitals.iloc[order].reset_index(drop=True)


def sort_rows_nulls_last(
    df: pd.DataFrame,
    by: str,
    ascending: bool = True,
    text: Optional[bool] = None,
) -> pd.DataFrame:
    """
    Sorts rows on one column in either direction, always keeping missing values
    at the bottom. Text columns use Thai-locale order.
    """
    if df.empty or by not in df.columns:
        return df.copy()

    is_text = text if text is not None else not pd.api.types.is_numeric_dtype(df[by])
    values = df[by].tolist()
    present = [i for i, v in enumerate(values) if not _is_missing(v)]
    missing = [i for i, v in enumerate(values) if _is_missing(v)]

    if is_text:
        present.sort(key=lambda i: thai_sort_key(values[i]), reverse=not ascending)
    else:
        present.sort(key=lambda i: float(values[i]), reverse=not ascending)
    return df.iloc[present + missing].reset_index(drop=True)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def facility_presence(df: pd.DataFrame, key: str, period_col: str) -> Dict[str, Set[Any]]:
    """Maps each facility to the set of periods it has rows for."""
    if df.empty or period_col not in df.columns:
        return {}
    rows = df.dropna(subset=[period_col])
    return {code: set(group[period_col].tolist()) for code, group in rows.groupby(key)}
