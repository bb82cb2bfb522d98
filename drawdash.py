# -*- coding: utf-8 -*-
# file: drawdash.py
"""DrawDash - Powerball history and site traffic dashboards

Loads one static CSV per page, parses it, derives summary statistics and renders them.
Includes:
- Powerball draw history: hot main numbers / Powerballs, multiplier counts, average ball sum
- Pick checker: five main numbers + Powerball compared against every past draw
- Website traffic page (pages/Traffic.py): combined Socrata + GeoHub users and the peak day

Run with `streamlit run Powerball.py`. Past draws do not predict future results.
"""

from __future__ import annotations

import csv
import io
import logging
import math
import os
import re
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from operator import attrgetter
from pathlib import Path
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import requests
import streamlit as st
from matplotlib.ticker import FuncFormatter

logger = logging.getLogger(__name__)

# ---------------------- Globals ----------------------
APP_DIR = Path(__file__).resolve().parent

WHITE_BALL_MAX = 69
POWERBALL_MAX = 26
MAIN_PICK_COUNT = 5
TOP_MAIN = 15
TOP_POWERBALL = 10
BEST_DRAW_COUNT = 3

STATUS_LOADING = "loading"
STATUS_READY = "ready"
STATUS_EMPTY = "empty"
STATUS_ERROR = "error"

DEFAULT_LOTTERY_CSV = "data/powerball.csv"
DEFAULT_TRAFFIC_CSV = "data/Open_Data_Website_Traffic.csv"
DEFAULT_TRAFFIC_RANGE = "2014–2018"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_LINE_BREAK = re.compile(r"\r?\n")
# mm/dd/yyyy with an optional time part ("09/26/2020 12:00:00 AM", "09/26/2020T00:00:00")
_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})(?:[ T].*)?$")

# HTTP session
SESSION = requests.Session()
SESSION.headers.update({"User-Agent": "DrawDash/0.1 (static CSV loader)"})


# ---------------------- Settings ----------------------

@dataclass(frozen=True)
class Settings:
    lottery_source: str = DEFAULT_LOTTERY_CSV
    traffic_source: str = DEFAULT_TRAFFIC_CSV
    http_timeout: Optional[float] = None
    log_level: str = "INFO"


def _setting(key: str) -> Optional[str]:
    """Look `key` up in Streamlit secrets first, then in the environment."""
    value = None
    try:
        value = st.secrets.get(key)
    except Exception:
        # no secrets.toml outside a deployed app
        logger.debug("Streamlit secrets unavailable for %s", key)
    if value is None:
        value = os.environ.get(key)
    if value is None or not str(value).strip():
        return None
    return str(value).strip()


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning("Ignoring DRAWDASH_HTTP_TIMEOUT=%r: not a number", raw)
        return None
    if not math.isfinite(timeout) or timeout <= 0:
        logger.warning("Ignoring DRAWDASH_HTTP_TIMEOUT=%r: must be a positive number", raw)
        return None
    return timeout


def load_settings() -> Settings:
    return Settings(
        lottery_source=_setting("DRAWDASH_LOTTERY_CSV") or DEFAULT_LOTTERY_CSV,
        traffic_source=_setting("DRAWDASH_TRAFFIC_CSV") or DEFAULT_TRAFFIC_CSV,
        http_timeout=_parse_timeout(_setting("DRAWDASH_HTTP_TIMEOUT")),
        log_level=(_setting("DRAWDASH_LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT)


# ---------------------- Records ----------------------

@dataclass(frozen=True)
class DrawRecord:
    """One historical Powerball drawing."""
    date_ms: int
    date_label: str
    main_numbers: Tuple[int, ...]
    powerball: int
    multiplier: Optional[int]
    main_sum: int

    def __str__(self) -> str:
        balls = " ".join(f"{n:02d}" for n in self.main_numbers)
        return f"{self.date_label}: {balls} PB:{self.powerball:02d}"


@dataclass(frozen=True)
class TrafficRecord:
    """One day of open-data portal traffic. Counts are `int` unless the export held a fraction."""
    date_ms: int
    date_label: str
    socrata_users: Optional[float]
    geohub_users: Optional[float]
    combined_users: float


def _date_fields(value: datetime) -> Tuple[int, str]:
    """Epoch milliseconds (midnight UTC of the calendar date) and display label."""
    midnight = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    date_ms = int((midnight - _EPOCH).total_seconds()) * 1000
    return date_ms, f"{value:%b} {value.day}, {value.year}"


def _year_of(date_ms: int) -> int:
    return (_EPOCH + timedelta(milliseconds=date_ms)).year


def _parse_number(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        numeric = float(text)
    except ValueError:
        return None
    return numeric if math.isfinite(numeric) else None


def _parse_count(value: Optional[str]) -> Optional[float]:
    """Whole counts come back as `int`; fractional ones stay `float`."""
    numeric = _parse_number(value)
    if numeric is None:
        return None
    return int(numeric) if numeric.is_integer() else numeric


# ---------------------- Parsers ----------------------

def _column(cols: Sequence[str], index: int) -> Optional[str]:
    return cols[index] if index < len(cols) else None


def _parse_draw_date(value: Optional[str]) -> Optional[pd.Timestamp]:
    """Slash dates are always month/day/year; `13/01/2020` is invalid, never day-first."""
    if not value:
        return None
    slash = _SLASH_DATE.match(value)
    if slash:
        stamp = pd.to_datetime("/".join(slash.groups()), format="%m/%d/%Y", errors="coerce")
    elif value[0].isdigit():
        stamp = pd.to_datetime(value, format="ISO8601", errors="coerce")
    else:
        # named months, e.g. "December 19, 2020"
        stamp = pd.to_datetime(value, errors="coerce")
    if pd.isna(stamp):
        return None
    if stamp.tzinfo is not None:
        stamp = stamp.tz_localize(None)
    return stamp


def _parse_winning_numbers(value: Optional[str]) -> Optional[Tuple[Tuple[int, ...], int]]:
    tokens = (value or "").split()
    if len(tokens) != MAIN_PICK_COUNT + 1:
        return None
    try:
        numbers = [int(t) for t in tokens]
    except ValueError:
        return None
    return tuple(numbers[:-1]), numbers[-1]


def _parse_multiplier(value: Optional[str]) -> Optional[int]:
    # exports sometimes write "2x"
    numeric = _parse_number((value or "").rstrip("xX"))
    if numeric is None or not numeric.is_integer():
        return None
    return int(numeric)


def _draw_record(cols: Sequence[str]) -> Optional[DrawRecord]:
    stamp = _parse_draw_date(_column(cols, 0))
    if stamp is None:
        return None
    numbers = _parse_winning_numbers(_column(cols, 1))
    if numbers is None:
        return None
    main_numbers, powerball = numbers
    date_ms, label = _date_fields(stamp)
    return DrawRecord(
        date_ms=date_ms,
        date_label=label,
        main_numbers=main_numbers,
        powerball=powerball,
        multiplier=_parse_multiplier(_column(cols, 2)),
        main_sum=sum(main_numbers),
    )


def parse_draws_csv(text: str) -> Tuple[DrawRecord, ...]:
    """Parse a `Draw Date, Winning Numbers, Multiplier` export into draws sorted by date.

    Quoted fields are honoured. Rows without a usable date or six winning numbers
    (five main + Powerball, last one is the Powerball) are dropped.
    """
    rows = list(csv.reader(io.StringIO(text.strip(), newline="")))[1:]
    rows = [[c.strip() for c in row] for row in rows if any(c.strip() for c in row)]
    draws = [r for r in (_draw_record(row) for row in rows) if r is not None]
    if len(draws) < len(rows):
        logger.debug("Dropped %d malformed draw rows", len(rows) - len(draws))
    return tuple(sorted(draws, key=attrgetter("date_ms")))


def _parse_month_day_year(value: Optional[str]) -> Optional[datetime]:
    parts = (value or "").split("/")
    if len(parts) != 3:
        return None
    try:
        month, day, year = (int(p) for p in parts)
        if 0 <= year < 100:
            # two-digit years are 19xx ("01/02/14" is Jan 2, 1914)
            year += 1900
        return datetime(year, month, day)
    except ValueError:
        return None


def _traffic_record(cols: Sequence[str]) -> Optional[TrafficRecord]:
    date = _parse_month_day_year(_column(cols, 0))
    if date is None:
        return None
    socrata = _parse_count(_column(cols, 1))
    geohub = _parse_count(_column(cols, 4))
    combined = _parse_count(_column(cols, 7))
    if combined is None and (socrata is not None or geohub is not None):
        combined = (socrata or 0) + (geohub or 0)
    if combined is None:
        return None
    date_ms, label = _date_fields(date)
    return TrafficRecord(
        date_ms=date_ms,
        date_label=label,
        socrata_users=socrata,
        geohub_users=geohub,
        combined_users=combined,
    )


def parse_traffic_csv(text: str) -> Tuple[TrafficRecord, ...]:
    """Parse the daily traffic export (mm/dd/yyyy dates, plain comma separated)."""
    lines = [line.strip() for line in _LINE_BREAK.split(text.strip())[1:]]
    lines = [line for line in lines if line]
    days = [r for r in (_traffic_record([v.strip() for v in line.split(",")]) for line in lines) if r is not None]
    if len(days) < len(lines):
        logger.debug("Dropped %d malformed traffic rows", len(lines) - len(days))
    return tuple(sorted(days, key=attrgetter("date_ms")))


# ---------------------- Aggregation ----------------------

@dataclass(frozen=True)
class FrequencyEntry:
    label: str
    hits: int
    value: int


@dataclass(frozen=True)
class DrawSummary:
    total_draws: int
    main_ranking: Tuple[FrequencyEntry, ...]
    powerball_ranking: Tuple[FrequencyEntry, ...]
    multiplier_ranking: Tuple[FrequencyEntry, ...]
    top_main: Tuple[FrequencyEntry, ...]
    top_powerball: Tuple[FrequencyEntry, ...]
    most_common_main: Optional[FrequencyEntry]
    most_common_powerball: Optional[FrequencyEntry]
    most_common_multiplier: Optional[FrequencyEntry]
    average_main_sum: Optional[int]
    time_range_label: Optional[str]
    latest_draw: Optional[DrawRecord]


@dataclass(frozen=True)
class TrafficSummary:
    total_days: int
    peak_day: Optional[TrafficRecord]
    time_range_label: Optional[str]
    latest_day: Optional[TrafficRecord]


def ball_label(value: int) -> str:
    return f"{value:02d}"


def multiplier_label(value: int) -> str:
    return f"{value}x"


def rank_frequencies(values: Iterable[int], label: Callable[[int], str] = ball_label) -> Tuple[FrequencyEntry, ...]:
    """Hit counts sorted descending; equal counts keep first-seen order."""
    counts = Counter(values)
    return tuple(FrequencyEntry(label(v), hits, v) for v, hits in counts.most_common())


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_time_range(records: Sequence) -> Optional[str]:
    if not records:
        return None
    return f"{_year_of(records[0].date_ms)}–{_year_of(records[-1].date_ms)}"


def summarize_draws(records: Sequence[DrawRecord]) -> DrawSummary:
    main_ranking = rank_frequencies(n for r in records for n in r.main_numbers)
    powerball_ranking = rank_frequencies(r.powerball for r in records)
    multiplier_ranking = rank_frequencies(
        (r.multiplier for r in records if r.multiplier is not None), label=multiplier_label
    )
    average = _round_half_up(sum(r.main_sum for r in records) / len(records)) if records else None
    return DrawSummary(
        total_draws=len(records),
        main_ranking=main_ranking,
        powerball_ranking=powerball_ranking,
        multiplier_ranking=multiplier_ranking,
        top_main=main_ranking[:TOP_MAIN],
        top_powerball=powerball_ranking[:TOP_POWERBALL],
        most_common_main=main_ranking[0] if main_ranking else None,
        most_common_powerball=powerball_ranking[0] if powerball_ranking else None,
        most_common_multiplier=multiplier_ranking[0] if multiplier_ranking else None,
        average_main_sum=average,
        time_range_label=format_time_range(records),
        latest_draw=records[-1] if records else None,
    )


def summarize_traffic(records: Sequence[TrafficRecord]) -> TrafficSummary:
    # max() keeps the first of equal peaks
    peak = max(records, key=attrgetter("combined_users")) if records else None
    return TrafficSummary(
        total_days=len(records),
        peak_day=peak,
        time_range_label=format_time_range(records),
        latest_day=records[-1] if records else None,
    )


# ---------------------- Prizes ----------------------
POWERBALL_PRIZES: Dict[Tuple[int, bool], str] = {
    (5, True): "JACKPOT",
    (5, False): "$1,000,000",
    (4, True): "$50,000",
    (4, False): "$100",
    (3, True): "$100",
    (3, False): "$7",
    (2, True): "$7",
    (1, True): "$4",
    (0, True): "$4",
}


def prize_for_match(main_matches: int, powerball_match: bool) -> str:
    return POWERBALL_PRIZES.get((main_matches, powerball_match), "No prize")


# ---------------------- Pick checker ----------------------
DUPLICATE_REASON = "Each main number can only be picked once."
MISSING_MAIN_REASON = f"Pick {MAIN_PICK_COUNT} main numbers between 1 and {WHITE_BALL_MAX}."
POWERBALL_REASON = f"Pick a Powerball between 1 and {POWERBALL_MAX}."


@dataclass(frozen=True)
class DrawMatch:
    record: DrawRecord
    main_matches: int
    powerball_match: bool
    prize: str


@dataclass(frozen=True)
class PickAnalysis:
    ready: bool
    numeric_main: FrozenSet[int]
    powerball: Optional[int]
    has_duplicates: bool
    reason: Optional[str]
    jackpot_hits: Tuple[DrawRecord, ...] = ()
    best_draws: Tuple[DrawMatch, ...] = ()


def clamp_pick_input(value: Optional[str], maximum: int) -> str:
    """Keep a typed ball number inside [1, maximum]; anything non-numeric clears the box.

    >>> clamp_pick_input("70", 69), clamp_pick_input("-3", 69), clamp_pick_input("x", 69)
    ('69', '1', '')
    """
    numeric = _parse_number(value)
    if numeric is None:
        return ""
    return str(int(min(max(numeric, 1), maximum)))


def _pick_value(value: Optional[str], maximum: int) -> Optional[int]:
    numeric = _parse_number(value)
    if numeric is None or not numeric.is_integer():
        return None
    number = int(numeric)
    return number if 1 <= number <= maximum else None


def match_draw(record: DrawRecord, pick: FrozenSet[int], powerball: int) -> DrawMatch:
    main_matches = sum(1 for n in record.main_numbers if n in pick)
    powerball_match = record.powerball == powerball
    return DrawMatch(record, main_matches, powerball_match, prize_for_match(main_matches, powerball_match))


def evaluate_pick(
    records: Sequence[DrawRecord],
    main_inputs: Sequence[Optional[str]],
    powerball_input: Optional[str],
) -> PickAnalysis:
    """Validate a pick and scan every draw for jackpot hits and the closest misses."""
    populated = [_pick_value(v, WHITE_BALL_MAX) for v in main_inputs if v and v.strip()]
    numbers = [n for n in populated if n is not None]
    numeric_main = frozenset(numbers)
    has_duplicates = len(numeric_main) != len(numbers)
    powerball = _pick_value(powerball_input, POWERBALL_MAX)

    if has_duplicates:
        reason: Optional[str] = DUPLICATE_REASON
    elif len(main_inputs) != MAIN_PICK_COUNT or len(numeric_main) != MAIN_PICK_COUNT:
        reason = MISSING_MAIN_REASON
    elif powerball is None:
        reason = POWERBALL_REASON
    else:
        reason = None

    if reason is not None:
        return PickAnalysis(False, numeric_main, powerball, has_duplicates, reason)

    matches = [match_draw(r, numeric_main, powerball) for r in records]
    jackpot_hits = tuple(m.record for m in matches if m.main_matches == MAIN_PICK_COUNT and m.powerball_match)
    ranked = sorted(matches, key=lambda m: (-m.main_matches, not m.powerball_match, -m.record.date_ms))
    return PickAnalysis(
        ready=True,
        numeric_main=numeric_main,
        powerball=powerball,
        has_duplicates=False,
        reason=None,
        jackpot_hits=jackpot_hits,
        best_draws=tuple(ranked[:BEST_DRAW_COUNT]),
    )


# ---------------------- Loader ----------------------

class LoadError(Exception):
    """The CSV source could not be fetched or read."""


@dataclass
class LoadState:
    """Load status for one page session. `active` is cleared once nobody wants the result."""
    status: str = STATUS_LOADING
    records: tuple = ()
    error: Optional[str] = None
    active: bool = True

    def close(self) -> None:
        self.active = False


def _resolve_path(source: str) -> Path:
    path = Path(source).expanduser()
    return path if path.is_absolute() else APP_DIR / path


def fetch_csv_text(source: str, *, timeout: Optional[float] = None) -> str:
    if source.lower().startswith(("http://", "https://")):
        try:
            resp = SESSION.get(source, timeout=timeout)
        except requests.RequestException as e:
            raise LoadError(f"Request for {source} failed: {e}") from e
        if not 200 <= resp.status_code < 300:
            raise LoadError(f"Request failed with status {resp.status_code}")
        return resp.content.decode("utf-8-sig", errors="replace")

    path = _resolve_path(source)
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Could not read {path}: {e}") from e


def load_dataset(
    state: LoadState,
    source: str,
    parser: Callable[[str], tuple],
    *,
    fetch: Callable[..., str] = fetch_csv_text,
    timeout: Optional[float] = None,
) -> LoadState:
    """Fetch and parse `source` once, writing the outcome into `state` if it is still active."""
    logger.info("Loading CSV data from %s", source)
    try:
        records = parser(fetch(source, timeout=timeout))
    except LoadError as e:
        logger.exception("Failed to load CSV data from %s", source)
        if state.active:
            state.status = STATUS_ERROR
            state.error = str(e)
        return state

    if not state.active:
        logger.info("Discarding late result for %s", source)
        return state
    state.records = records
    state.status = STATUS_READY if records else STATUS_EMPTY
    logger.info("Loaded %d records from %s", len(records), source)
    return state


# ---------------------- Tables & chart data ----------------------

def ranking_table(entries: Sequence[FrequencyEntry]) -> pd.DataFrame:
    total = sum(e.hits for e in entries)
    rows = []
    for e in entries:
        pct = (100.0 * e.hits / total) if total else 0.0
        rows.append({"number": e.label, "hits": e.hits, "percent": round(pct, 3)})
    return pd.DataFrame(rows, columns=["number", "hits", "percent"])


def frequency_array(entries: Sequence[FrequencyEntry], maximum: int) -> np.ndarray:
    """Hits for every ball 1..maximum (index 0 = ball 1); unseen balls are zero."""
    hits = np.zeros(maximum, dtype=int)
    for e in entries:
        if 1 <= e.value <= maximum:
            hits[e.value - 1] = e.hits
    return hits


def draws_table(draws: Sequence[DrawRecord]) -> pd.DataFrame:
    rows = [{
        "date": d.date_label,
        "main numbers": " ".join(ball_label(n) for n in d.main_numbers),
        "powerball": ball_label(d.powerball),
        "multiplier": multiplier_label(d.multiplier) if d.multiplier is not None else "",
    } for d in draws]
    return pd.DataFrame(rows, columns=["date", "main numbers", "powerball", "multiplier"])


def traffic_frame(records: Sequence[TrafficRecord]) -> pd.DataFrame:
    df = pd.DataFrame(
        [(r.date_ms, r.combined_users, r.socrata_users, r.geohub_users) for r in records],
        columns=["date_ms", "Combined users", "Socrata users", "GeoHub users"],
    )
    df["date"] = pd.to_datetime(df["date_ms"], unit="ms")
    for c in ["Combined users", "Socrata users", "GeoHub users"]:
        df[c] = pd.to_numeric(df[c], errors="coerce")
    return df


MetricCard = Tuple[str, str, Optional[str]]


def _hits_card(title: str, entry: Optional[FrequencyEntry], noun: str = "hits") -> MetricCard:
    if entry is None:
        return title, "–", None
    return title, entry.label, f"{entry.hits} {noun}"


def draw_metric_cards(summary: DrawSummary) -> List[MetricCard]:
    """(label, value, delta) for each `st.metric` card on the lottery page."""
    average = summary.average_main_sum
    return [
        ("Draws", f"{summary.total_draws:,}", None),
        ("Years", summary.time_range_label or "–", None),
        ("Average main-ball sum", str(average) if average is not None else "–", None),
        _hits_card("Hottest main number", summary.most_common_main),
        _hits_card("Hottest Powerball", summary.most_common_powerball),
        _hits_card("Most common multiplier", summary.most_common_multiplier, "draws"),
    ]


def _day_card(title: str, day: Optional[TrafficRecord]) -> MetricCard:
    if day is None:
        return title, "–", None
    return title, f"{day.combined_users:,}", day.date_label


def traffic_metric_cards(summary: TrafficSummary) -> List[MetricCard]:
    return [
        ("Days", f"{summary.total_days:,}", None),
        _day_card("Peak day users", summary.peak_day),
        _day_card("Latest day users", summary.latest_day),
    ]


def render_metric_cards(cards: Sequence[MetricCard]) -> None:  # pragma: no cover - UI only
    for col, (title, value, delta) in zip(st.columns(len(cards)), cards):
        with col:
            st.metric(title, value, delta, delta_color="off")


# ---------------------- Memoized views ----------------------

@st.cache_data(show_spinner=False)
def cached_draw_summary(records: Tuple[DrawRecord, ...]) -> DrawSummary:
    return summarize_draws(records)


@st.cache_data(show_spinner=False)
def cached_traffic_summary(records: Tuple[TrafficRecord, ...]) -> TrafficSummary:
    return summarize_traffic(records)


@st.cache_data(show_spinner=False)
def cached_pick_analysis(
    records: Tuple[DrawRecord, ...], main_inputs: Tuple[str, ...], powerball_input: str
) -> PickAnalysis:
    return evaluate_pick(records, main_inputs, powerball_input)


# ---------------------- UI helpers ----------------------
STATUS_MESSAGES = {
    STATUS_LOADING: "Loading {noun}…",
    STATUS_ERROR: "Something went wrong while loading the CSV. Please try again.",
    STATUS_EMPTY: "The data file was empty. Double-check the CSV contents and refresh.",
}

PICK_KEYS = tuple(f"pick_main_{i}" for i in range(MAIN_PICK_COUNT))
PICK_POWERBALL_KEY = "pick_powerball"
PICK_CHECKED_KEY = "pick_checked"


def session_load_state(key: str, source: str, parser: Callable[[str], tuple], settings: Settings) -> LoadState:  # pragma: no cover - UI only
    state = st.session_state.get(key)
    if state is None:
        state = LoadState()
        st.session_state[key] = state
        with st.spinner("Loading data…"):
            load_dataset(state, source, parser, timeout=settings.http_timeout)
    return state


def render_status(state: LoadState, noun: str) -> bool:  # pragma: no cover - UI only
    if state.status == STATUS_READY:
        return True
    message = STATUS_MESSAGES[state.status].format(noun=noun)
    if state.status == STATUS_LOADING:
        st.info(message)
    else:
        st.error(message)
        if state.error:
            st.caption(state.error)
    return False


def _bar_chart(entries: Sequence[FrequencyEntry], title: str, color: str, xlabel: str = "Number") -> None:  # pragma: no cover - UI only
    fig, ax = plt.subplots(figsize=(8, 3.5))
    ax.bar([e.label for e in entries], [e.hits for e in entries], color=color)
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Hits")
    st.pyplot(fig, clear_figure=True)
    plt.close(fig)


def _all_numbers_chart(entries: Sequence[FrequencyEntry], maximum: int, title: str, color: str) -> None:  # pragma: no cover - UI only
    hits = frequency_array(entries, maximum)
    balls = np.arange(1, maximum + 1)
    fig, ax = plt.subplots(figsize=(11, 3.5))
    ax.bar(balls, hits, color=color)
    if hits.any():
        ax.axhline(hits.mean(), color="#555555", linestyle="--", linewidth=1, label="average")
        ax.legend()
    ax.set_xlim(0, maximum + 1)
    ax.set_title(title)
    ax.set_xlabel("Number")
    ax.set_ylabel("Hits")
    st.pyplot(fig, clear_figure=True)
    plt.close(fig)


def render_traffic_chart(records: Sequence[TrafficRecord]) -> None:  # pragma: no cover - UI only
    df = traffic_frame(records)
    fig, ax = plt.subplots(figsize=(11, 4.5))
    ax.plot(df["date"], df["Combined users"], color="#003459", linewidth=2.5, label="Combined users")
    ax.plot(df["date"], df["Socrata users"], color="#4f772d", linewidth=1.5, linestyle="--", label="Socrata users")
    ax.plot(df["date"], df["GeoHub users"], color="#f28482", linewidth=1.5, linestyle=":", label="GeoHub users")
    ax.yaxis.set_major_formatter(FuncFormatter(lambda v, _pos: f"{v:,.0f}"))
    ax.grid(color="#e1e1e1", linestyle="--")
    ax.legend()
    st.pyplot(fig, clear_figure=True)
    plt.close(fig)


def _clamp_widget(key: str, maximum: int) -> None:  # pragma: no cover - UI only
    st.session_state[key] = clamp_pick_input(st.session_state.get(key, ""), maximum)


def _match_rows(matches: Sequence[DrawMatch], pick: FrozenSet[int]) -> List[Dict[str, object]]:
    rows = []
    for m in matches:
        rows.append({
            "date": m.record.date_label,
            "numbers": " ".join(
                f"[{ball_label(n)}]" if n in pick else ball_label(n) for n in m.record.main_numbers
            ),
            "powerball": ball_label(m.record.powerball),
            "main matches": m.main_matches,
            "powerball match": "yes" if m.powerball_match else "no",
            "prize": m.prize,
        })
    return rows


def render_picker(records: Tuple[DrawRecord, ...]) -> None:  # pragma: no cover - UI only
    st.subheader("Check your numbers against history")
    cols = st.columns(MAIN_PICK_COUNT + 1)
    for i, (col, key) in enumerate(zip(cols, PICK_KEYS), start=1):
        with col:
            st.text_input(
                f"Ball {i}",
                key=key,
                max_chars=2,
                placeholder=f"1–{WHITE_BALL_MAX}",
                on_change=_clamp_widget,
                args=(key, WHITE_BALL_MAX),
            )
    with cols[-1]:
        st.text_input("Powerball", key=PICK_POWERBALL_KEY, max_chars=2, placeholder=f"1–{POWERBALL_MAX}")

    main_inputs = tuple(st.session_state.get(k, "") for k in PICK_KEYS)
    powerball_input = st.session_state.get(PICK_POWERBALL_KEY, "")
    analysis = cached_pick_analysis(records, main_inputs, powerball_input)

    if st.button("Check numbers", type="primary", disabled=not analysis.ready):
        st.session_state[PICK_CHECKED_KEY] = True

    if not analysis.ready:
        if any(main_inputs) or powerball_input:
            st.info(analysis.reason)
        return
    if not st.session_state.get(PICK_CHECKED_KEY):
        return

    if analysis.jackpot_hits:
        st.success(f"Jackpot! Your numbers were drawn {len(analysis.jackpot_hits)} time(s).")
        st.dataframe(draws_table(analysis.jackpot_hits), use_container_width=True, hide_index=True)
    else:
        st.warning(f"No jackpot in {len(records):,} draws. Closest results:")
        st.dataframe(
            pd.DataFrame(_match_rows(analysis.best_draws, analysis.numeric_main)),
            use_container_width=True,
            hide_index=True,
        )


def render_draw_summary(summary: DrawSummary) -> None:  # pragma: no cover - UI only
    render_metric_cards(draw_metric_cards(summary))
    if summary.latest_draw is not None:
        st.write(f"Latest draw: **{summary.latest_draw}**")


# ---------------------- Streamlit App ----------------------

def main() -> None:  # pragma: no cover - UI only
    settings = load_settings()
    configure_logging(settings.log_level)

    st.set_page_config(page_title="DrawDash - Powerball History", layout="wide")
    st.title("DrawDash - Powerball History")
    st.caption("Historical results only. Past draws do not predict future ones.")

    state = session_load_state("draws_load", settings.lottery_source, parse_draws_csv, settings)
    if not render_status(state, noun="draw history"):
        return

    records = state.records
    summary = cached_draw_summary(records)
    render_draw_summary(summary)

    tab_freq, tab_pick, tab_history = st.tabs(["Frequencies", "Check numbers", "History"])

    with tab_freq:
        col1, col2 = st.columns(2)
        with col1:
            _bar_chart(summary.top_main, f"Top {TOP_MAIN} main numbers", "#1f77b4")
            st.dataframe(ranking_table(summary.top_main), use_container_width=True, hide_index=True)
        with col2:
            _bar_chart(summary.top_powerball, f"Top {TOP_POWERBALL} Powerballs", "#d62728")
            st.dataframe(ranking_table(summary.top_powerball), use_container_width=True, hide_index=True)
        _all_numbers_chart(summary.main_ranking, WHITE_BALL_MAX, "All main numbers", "#1f77b4")
        if summary.multiplier_ranking:
            _bar_chart(summary.multiplier_ranking, "Power Play multipliers", "#ff7f0e", xlabel="Multiplier")

    with tab_pick:
        render_picker(records)

    with tab_history:
        st.dataframe(draws_table(records[::-1]), use_container_width=True, hide_index=True)

