"""Demo pipeline: competitor selection for a marketplace product.

Records one trace per product through a TraceRecorder. The four steps are
Keyword Generation, Candidate Search, Apply Filters and Rank & Select. The
scenario controls how many generated candidates survive the filters, so the
demo produces a successful, a failed and a partially filtered trace.
"""

import random
from typing import Any, Literal

from pipeline_xray.logging import get_pipeline_logger
from pipeline_xray.models import StepData, StepStatus, Trace
from pipeline_xray.recorder import TraceRecorder

logger = get_pipeline_logger(__name__)

Scenario = Literal["perfect", "failure", "partial"]

MIN_PRICE = 15
MIN_RATING = 3.8
CANDIDATE_COUNT = 50
RANKING_SIZE = 10

DEMO_RUNS: tuple[tuple[str, str, Scenario], ...] = (
    ("trace-001", "Stainless Steel Water Bottle", "perfect"),
    ("trace-002", "Wireless Bluetooth Earbuds", "failure"),
    ("trace-003", "Yoga Mat Premium", "partial"),
)

_KEYWORDS: dict[str, tuple[list[str], str]] = {
    "Stainless Steel Water Bottle": (
        ["stainless steel water bottle", "insulated bottle", "metal water bottle", "vacuum flask"],
        "Extracted attributes: material (steel), feature (insulated), product type (water bottle)",
    ),
    "Wireless Bluetooth Earbuds": (
        ["wireless earbuds", "bluetooth earphones", "TWS earbuds", "wireless headphones"],
        "Extracted attributes: connectivity (wireless, bluetooth), product type (earbuds/earphones)",
    ),
    "Yoga Mat Premium": (
        ["yoga mat", "exercise mat", "fitness mat", "non-slip yoga mat"],
        "Extracted attributes: activity (yoga, exercise), feature (non-slip), quality (premium)",
    ),
}


def generate_candidates(count: int, scenario: Scenario, rng: random.Random) -> list[dict[str, Any]]:
    """Generate marketplace candidates whose price/rating spread depends on the scenario."""
    candidates: list[dict[str, Any]] = []
    for i in range(count):
        if scenario == "perfect":
            price = 15 + rng.random() * 85
            rating = 3.8 + rng.random() * 1.2
        elif scenario == "failure":
            # always under MIN_PRICE so nothing qualifies
            price = 5 + rng.random() * 9.99
            rating = 2.0 + rng.random() * 2.0
        elif i % 4 == 0:
            price = 20 + rng.random() * 50
            rating = 4.0 + rng.random() * 1.0
        else:
            price = 8 + rng.random() * 20
            rating = 2.5 + rng.random() * 2.5

        candidates.append({
            "asin": f"B{i + 1:02d}{scenario[0].upper()}",
            "price": round(price, 2),
            "rating": round(rating, 1),
            "reviews": rng.randrange(50, 5050),
            "title": f"Product {i + 1} - {scenario} scenario",
        })
    return candidates


def generate_keywords(product_name: str) -> dict[str, Any]:
    keywords, reasoning = _KEYWORDS.get(
        product_name,
        ([product_name.lower()], f"Basic keyword extraction for: {product_name}"),
    )
    return {"keywords": list(keywords), "reasoning": reasoning}


def apply_filters(candidates: list[dict[str, Any]]) -> dict[str, Any]:
    """Keep candidates with price >= MIN_PRICE and rating >= MIN_RATING, explaining every verdict."""
    evaluations: list[dict[str, Any]] = []
    passed: list[dict[str, Any]] = []

    for candidate in candidates:
        fail_reasons: list[str] = []
        if candidate["price"] < MIN_PRICE:
            fail_reasons.append(f"Price ${candidate['price']:.2f} < Min ${MIN_PRICE}")
        if candidate["rating"] < MIN_RATING:
            fail_reasons.append(f"Rating {candidate['rating']} < Min {MIN_RATING}")

        qualified = not fail_reasons
        evaluations.append({
            "asin": candidate["asin"],
            "qualified": qualified,
            "reason": "Passed all checks" if qualified else f"Failed: {'; '.join(fail_reasons)}",
        })
        if qualified:
            passed.append(candidate)

    return {
        "passed": len(passed),
        "failed": len(candidates) - len(passed),
        "evaluations": evaluations,
        "passedCandidates": passed,
    }


def rank_and_select(candidates: list[dict[str, Any]]) -> dict[str, Any]:
    """Rank by review count and select the top candidate."""
    if not candidates:
        return {"selected": None, "ranking": []}

    ranked = sorted(candidates, key=lambda c: c.get("reviews", 0), reverse=True)
    ranking = [
        {"asin": c["asin"], "reviews": c.get("reviews", 0), "rank": rank}
        for rank, c in enumerate(ranked[:RANKING_SIZE], start=1)
    ]
    return {"selected": ranked[0], "ranking": ranking}


async def record_demo_trace(
    recorder: TraceRecorder,
    trace_id: str,
    product_name: str,
    scenario: Scenario,
    rng: random.Random,
) -> Trace:
    """Run the competitor-selection pipeline for one product and save its trace."""
    logger.info(f"Generating trace for: {product_name} ({scenario})")
    recorder.start_trace(trace_id, f"{product_name} - Competitor Analysis")

    keywords = generate_keywords(product_name)
    recorder.add_step(StepData(
        step_name="Keyword Generation",
        input={"productName": product_name},
        output=keywords,
        reasoning=keywords["reasoning"],
    ))

    candidates = generate_candidates(CANDIDATE_COUNT, scenario, rng)
    total_results = rng.randrange(500, 3500)
    recorder.add_step(StepData(
        step_name="Candidate Search",
        input={"keywords": keywords["keywords"]},
        output={"total_results": total_results, "candidates": candidates},
        reasoning=(
            f"Found {total_results} total results in marketplace. "
            f"Retrieved top {len(candidates)} candidates for analysis."
        ),
    ))

    filtered = apply_filters(candidates)
    recorder.add_step(StepData(
        step_name="Apply Filters",
        input={
            "candidates_count": len(candidates),
            "filters": {"min_price": MIN_PRICE, "min_rating": MIN_RATING},
        },
        output=filtered,
        reasoning=(
            f"Applied quality filters. {filtered['passed']} candidates passed "
            f"(Price >= ${MIN_PRICE} AND Rating >= {MIN_RATING}). {filtered['failed']} candidates eliminated."
        ),
        status=StepStatus.SUCCESS if filtered["passed"] > 0 else StepStatus.FAILURE,
    ))

    ranked = rank_and_select(filtered["passedCandidates"])
    selected = ranked["selected"]
    recorder.add_step(StepData(
        step_name="Rank & Select",
        input={"qualified_candidates": filtered["passed"]},
        output=ranked,
        reasoning=(
            f"Selected {selected['asin']} with {selected['reviews']} reviews as the top competitor."
            if selected
            else "No qualified candidates available for selection. Pipeline failed."
        ),
        status=StepStatus.SUCCESS if selected else StepStatus.FAILURE,
    ))

    if selected is None:
        recorder.set_trace_status(StepStatus.FAILURE)

    return await recorder.save()


async def generate_demo_traces(recorder: TraceRecorder, *, seed: int | None = None) -> list[Trace]:
    """Record the three demo scenarios in order."""
    rng = random.Random(seed)
    return [
        await record_demo_trace(recorder, trace_id, product_name, scenario, rng)
        for trace_id, product_name, scenario in DEMO_RUNS
    ]
