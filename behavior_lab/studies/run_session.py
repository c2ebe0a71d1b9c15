"""
Run one training session headless and report what changed.

Run: python -m behavior_lab.studies.run_session --scenario meowing

No hypotheses yet, just observation.
"""

import argparse
import logging
import time
from dataclasses import replace
from typing import Optional

import numpy as np

from behavior_lab.core.state import Intervention
from behavior_lab.scenarios.catalog import SCENARIOS, get_scenario, load_catalog
from behavior_lab.session.engine import initialize
from behavior_lab.session.pacing import Pacer, run_to_completion
from behavior_lab.session.summary import generate_summary, insights, performance_rating


def run_study(
    scenario_id: str = "jumping",
    intervention: Optional[str] = None,
    duration: Optional[float] = None,
    seed: Optional[int] = None,
    catalog_path: Optional[str] = None,
    realtime: bool = False,
    speed: float = 3.0,
    plot_path: Optional[str] = None,
    as_json: bool = False
):
    """
    Observe one session.

    Watch:
    - Target vs alternative response rates
    - Reinforcers delivered and satiation
    - Extinction bursts
    """
    catalog = load_catalog(catalog_path) if catalog_path else SCENARIOS
    scenario = get_scenario(scenario_id, catalog)

    # Command-line overrides
    defaults = scenario.defaults
    if intervention is not None:
        defaults = replace(defaults, intervention=Intervention(intervention))
    if duration is not None:
        defaults = replace(defaults, session_duration=duration)
    scenario = replace(scenario, defaults=defaults)

    rng = np.random.default_rng(seed) if seed is not None else None
    state = initialize(scenario, rng=rng)

    if not as_json:
        print("=" * 50)
        print(f"Session: {scenario.title}")
        print("=" * 50)
        print(f"\nGoal: {scenario.goal.value} '{scenario.target_behavior}' "
              f"vs '{scenario.alternative_behavior}'")
        print(f"Intervention: {state.intervention.value}, "
              f"target={state.schedule_target.label()}, "
              f"alt={state.schedule_alt.label()}, "
              f"reinforcer={state.reinforcer.kind.value}x{state.reinforcer.magnitude}")
        print("-" * 50)

    if realtime:
        pacer = Pacer(state, speed=speed)
        while not state.is_complete:
            if pacer.frame() and not as_json:
                print(f"\r  {state.progress:6.1%}  t={state.t:5.1f}s  "
                      f"reinforcers={state.reinforcers_delivered}", end="", flush=True)
            time.sleep(1 / 60)
        if not as_json:
            print()
    else:
        run_to_completion(state)

    summary = generate_summary(state, scenario)

    if as_json:
        print(summary.to_json())
    else:
        kpis = summary.kpis
        print(f"\nDuration: {summary.duration:.1f}s")
        print(f"Target behaviors: {state.target_behavior_count}, "
              f"alternative behaviors: {state.alt_behavior_count}")
        print(f"Reinforcers delivered: {kpis.reinforcers_delivered}")
        print(f"Target rate change: {kpis.target_rate_change_pct:+.1f}%")
        print(f"Alternative rate change: {kpis.alt_rate_change_pct:+.1f}%")
        print(f"Mean IRT: target {kpis.avg_irt_target:.2f}s, "
              f"alternative {kpis.avg_irt_alt:.2f}s")
        print(f"Extinction burst: {'yes' if kpis.burst_detected else 'no'}")
        print(f"Final MO={kpis.final_mo:.2f}, SAT={kpis.final_sat:.2f}")

        rating = performance_rating(summary, scenario)
        print(f"\nRating: {rating.rating}. {rating.message}")
        for note in insights(summary, scenario):
            print(f"  - {note}")

    if plot_path:
        from behavior_lab.observations.visualize import plot_session
        plot_session(state, save_path=plot_path)
        if not as_json:
            print(f"\nRate chart saved to {plot_path}")

    return summary


def main():
    parser = argparse.ArgumentParser(description="Single training session")
    parser.add_argument("--scenario", default="jumping", help="Scenario id")
    parser.add_argument("--intervention", choices=[i.value for i in Intervention],
                        help="Override the scenario's intervention")
    parser.add_argument("--duration", type=float, help="Session length (seconds)")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--catalog", help="YAML scenario catalog")
    parser.add_argument("--realtime", action="store_true", help="Pace by wall clock")
    parser.add_argument("--speed", type=float, default=3.0, help="Realtime speed multiplier")
    parser.add_argument("--plot", help="Save a rate chart to this path")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    run_study(
        scenario_id=args.scenario,
        intervention=args.intervention,
        duration=args.duration,
        seed=args.seed,
        catalog_path=args.catalog,
        realtime=args.realtime,
        speed=args.speed,
        plot_path=args.plot,
        as_json=args.json
    )


if __name__ == "__main__":
    main()
