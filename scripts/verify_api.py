"""
Smoke check against a running StarWatch backend.

Starts a temporary uvicorn process when nothing answers on port 8000.
Hits the real upstream feeds, so it needs network access.
"""
import httpx
import time
import sys
import subprocess
import os

ROOT_URL = "http://127.0.0.1:8000"
BASE_URL = f"{ROOT_URL}/api/v1"


def check_backend():
    try:
        r = httpx.get(f"{ROOT_URL}/health", timeout=2)
        return r.status_code == 200
    except httpx.HTTPError:
        return False


def start_backend():
    print("Starting temporary backend...")
    p = subprocess.Popen([sys.executable, "-m", "uvicorn", "starwatch.main:app", "--host", "127.0.0.1", "--port", "8000"],
                         cwd=os.path.join(os.getcwd(), "backend"),
                         stdout=subprocess.DEVNULL,
                         stderr=subprocess.DEVNULL)
    for i in range(20):
        if check_backend():
            print("Backend started.")
            return p
        time.sleep(1)
    print("Backend failed to start.")
    return None


def verify_satellites():
    print("Testing Satellite Listing...")
    r = httpx.get(f"{BASE_URL}/satellites/", timeout=60)
    if r.status_code != 200:
        print(f"[FAIL] Listing failed: {r.status_code}")
        return

    data = r.json()
    print(f"[PASS] Retrieved {len(data)} satellites.")
    if not data:
        return

    sample = data[0]
    print(f"  Sample: {sample['name']} (NORAD {sample['norad_id']}, {sample['version']}, {sample['health_status']})")

    norad_id = sample["norad_id"]
    print(f"\nTesting Satellite Detail (NORAD {norad_id})...")
    r_detail = httpx.get(f"{BASE_URL}/satellites/{norad_id}", timeout=10)
    if r_detail.status_code == 200:
        print(f"[PASS] Detail retrieval successful (health score {r_detail.json()['health_score']}).")
    else:
        print(f"[FAIL] Detail retrieval failed: {r_detail.status_code}")

    print("\nTesting Unknown Satellite...")
    r_missing = httpx.get(f"{BASE_URL}/satellites/1", timeout=10)
    if r_missing.status_code == 404:
        print("[PASS] Unknown NORAD id returns 404.")
    else:
        print(f"[FAIL] Expected 404, got {r_missing.status_code}")


def verify_launches():
    print("\nTesting Launch History...")
    r = httpx.get(f"{BASE_URL}/launches/", timeout=60)
    if r.status_code != 200:
        print(f"[FAIL] Launches failed: {r.status_code}")
        return
    launches = r.json()
    print(f"[PASS] Retrieved {len(launches)} launches.")
    if launches:
        print(f"  Latest: {launches[0]['name']} ({launches[0]['date_utc']})")


def verify_stats():
    print("\nTesting Constellation Stats...")
    r = httpx.get(f"{BASE_URL}/stats/", timeout=60)
    if r.status_code != 200:
        print(f"[FAIL] Stats failed: {r.status_code}")
        return
    stats = r.json()
    print(f"[PASS] {stats['active_satellites']} active / {stats['total_satellites']} total, "
          f"avg altitude {stats['avg_altitude_km']} km")

    print("\nTesting Fun Facts...")
    r_facts = httpx.get(f"{BASE_URL}/fun-facts/", timeout=60)
    if r_facts.status_code == 200 and len(r_facts.json()) == 8:
        for fact in r_facts.json():
            print(f"  {fact['label']}: {fact['value']}")
        print("[PASS] Fun facts complete.")
    else:
        print(f"[FAIL] Fun facts failed: {r_facts.status_code}")


def verify_live():
    print("\nTesting Live Launch Data...")
    r = httpx.get(f"{BASE_URL}/live/", timeout=30)
    if r.status_code != 200:
        print(f"[FAIL] Live data failed: {r.status_code}")
        return
    live = r.json()
    next_launch = live.get("next_launch")
    if next_launch:
        print(f"[PASS] Next: {next_launch['name']} in {live['countdown_seconds']}s")
    else:
        print("[PASS] No upcoming launch scheduled.")


if __name__ == "__main__":
    server_process = None
    if not check_backend():
        server_process = start_backend()

    if check_backend():
        try:
            verify_satellites()
            verify_launches()
            verify_stats()
            verify_live()
        except httpx.HTTPError as e:
            print(f"Test failed with exception: {e}")
    else:
        print("Could not connect to backend.")

    if server_process:
        print("Stopping temporary backend...")
        server_process.terminate()
