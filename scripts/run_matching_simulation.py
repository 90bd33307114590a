# Run from the repository root:
#   python -m scripts.generate_mock_travels
#   python -m scripts.run_matching_simulation
import logging
import os
import random
import time
from datetime import datetime
from typing import List

import pandas as pd

from dispatch.matcher import find_matching_travels
from drivers.models import TravelOffer
from rides.insertion.policy import options_from_env
from rides.models import Coordinate, PassengerStops

# CSVs live at the repository root whatever the working directory is.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def load_travels(filepath="mock_travels_100.csv") -> List[TravelOffer]:
    df = pd.read_csv(os.path.join(BASE_DIR, filepath), parse_dates=["start_time"])

    travels = []
    for _, row in df.iterrows():
        try:
            travel = TravelOffer.new(
                travel_id=str(row["travel_id"]),
                driver_id=str(row["driver_id"]),
                start=(row["start_lat"], row["start_lon"]),
                end=(row["end_lat"], row["end_lon"]),
                start_time=row["start_time"].to_pydatetime(),
                price=row["price"],
                spaces_available=row["spaces_available"],
                status=row["status"],
                stored_route=row["route_polyline"] if isinstance(row["route_polyline"], str) else None,
            )
        except ValueError as e:
            # one bad row (invalid coordinates / unknown status) must not abort the load
            print(f"[SKIPPED] Travel {row['travel_id']}: {e}")
            continue
        travels.append(travel)
    return travels

def random_passenger(base_lat=-17.824858, base_lon=31.053028) -> PassengerStops:
    return PassengerStops(
        pickup=Coordinate(base_lat + (random.random() - 0.5) * 0.05, base_lon + (random.random() - 0.5) * 0.05),
        dropoff=Coordinate(base_lat + (random.random() - 0.5) * 0.10, base_lon + (random.random() - 0.5) * 0.10),
    )

def run_simulation(passengers=20):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("=== STARTING PASSENGER MATCHING SIMULATION ===")

    # 1. Load Data
    travels = load_travels()
    print(f"Loaded {len(travels)} Travels.\n")

    # 2. Configure System (MATCHING_* variables / .env)
    options = options_from_env()
    print(f"Options: {options}\n")

    # 3. Match random passengers
    rows = []
    start_time = time.time()
    for i in range(passengers):
        stops = random_passenger()
        result = find_matching_travels(travels, stops, options, now=datetime.now(), max_results=3)

        if not result.matches:
            print(f"[NO MATCH] Passenger {i+1} -> 0 compatible travels.")
            continue

        best = result.matches[0]
        print(
            f"[MATCH] Passenger {i+1} -> {best.travel.id} "
            f"(+{best.summary.additional_minutes:.1f} min, +{best.summary.time_increase_percent:.0f}%) "
            f"among {result.total_candidates} candidates"
        )
        for rank, match in enumerate(result.matches, 1):
            rows.append({"passenger": i + 1, "rank": rank, "travel_id": match.travel.id, **match.summary.to_dict()})

    print(f"\nMatched {passengers} passengers in {time.time() - start_time:.2f}s.")

    # Save at the repository root, next to the input CSV
    output_path = os.path.join(BASE_DIR, "matching_results.csv")
    pd.DataFrame(rows).to_csv(output_path, index=False)

    print("\n=== SIMULATION COMPLETE ===")
    print(f"Results written to '{output_path}'.")

if __name__ == "__main__":
    run_simulation()
