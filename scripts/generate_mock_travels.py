import csv
import os
import random
from datetime import datetime, timedelta

import polyline


# Written at the repository root, where run_matching_simulation reads it.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def generate_mock_travels(filename="mock_travels_100.csv", count=100):
    output_path = os.path.join(BASE_DIR, filename)
    # Base coordinate roughly mapping to the center of Harare.
    base_lat = -17.824858
    base_lon = 31.053028
    departure_base = datetime.now().replace(second=0, microsecond=0) + timedelta(hours=1)

    with open(output_path, mode='w', newline='') as file:
        writer = csv.writer(file)
        writer.writerow([
            "travel_id", "driver_id", "start_lat", "start_lon", "end_lat", "end_lon",
            "start_time", "price", "spaces_available", "status", "route_polyline",
        ])

        for i in range(count):
            travel_id = f"TRV-{str(i+1).zfill(3)}"
            driver_id = f"DRV-{str(random.randint(1, count // 2)).zfill(3)}"

            # Trips start and end anywhere in the city (roughly +/- 10km)
            start = (base_lat + (random.random() - 0.5) * 0.15, base_lon + (random.random() - 0.5) * 0.15)
            end = (base_lat + (random.random() - 0.5) * 0.15, base_lon + (random.random() - 0.5) * 0.15)

            # Up to 2 already committed stops, roughly along the straight line
            stops = []
            for _ in range(random.randint(0, 2)):
                t = random.random()
                stops.append((
                    start[0] + (end[0] - start[0]) * t + (random.random() - 0.5) * 0.005,
                    start[1] + (end[1] - start[1]) * t + (random.random() - 0.5) * 0.005,
                ))
            stops.sort(key=lambda p: (p[0] - start[0]) ** 2 + (p[1] - start[1]) ** 2)
            route = polyline.encode([start] + stops + [end])

            start_time = departure_base + timedelta(minutes=random.randint(-120, 240))

            # 85% confirmed, the rest still pending or cancelled
            roll = random.random()
            status = "confirmed" if roll < 0.85 else ("pending" if roll < 0.95 else "cancelled")

            writer.writerow([
                travel_id, driver_id,
                round(start[0], 6), round(start[1], 6), round(end[0], 6), round(end[1], 6),
                start_time.isoformat(), random.choice([2, 3, 4, 5]), random.randint(0, 4), status, route,
            ])

    print(f"Successfully generated {count} mock travels into '{output_path}'.")

if __name__ == "__main__":
    generate_mock_travels()
