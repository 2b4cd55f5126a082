import sys

import requests

BASE_URL = "http://127.0.0.1:3000"

# PNG signature; n8n gets the bytes untouched, the relay never decodes them
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def run_check(base_url: str = BASE_URL):
    print(f"--- STARTING CONNECTIVITY CHECK AGAINST {base_url} ---")

    # 1. Health
    try:
        r = requests.get(f"{base_url}/api/health", timeout=2)
        print(f"[{'PASS' if r.status_code == 200 else 'FAIL'}] GET /api/health -> {r.status_code} {r.text}")
    except Exception as e:
        print(f"[FAIL] Could not connect to backend: {e}")
        return

    # 2. n8n reachability as seen from the server
    try:
        r = requests.get(f"{base_url}/api/test-n8n", timeout=10)
        print(f"[INFO] GET /api/test-n8n -> {r.json()}")
    except Exception as e:
        print(f"[FAIL] GET /api/test-n8n error: {e}")

    # 3. Server-side validation rejects a text file
    r = requests.post(
        f"{base_url}/api/extract",
        files={"marksheet": ("notes.txt", b"hello", "text/plain")},
        timeout=5,
    )
    print(f"[{'PASS' if r.status_code == 400 else 'FAIL'}] POST /api/extract (text/plain) -> {r.status_code}")

    # 4. Real relay round trip
    print("\n--- TESTING MARKSHEET RELAY ---")
    try:
        r = requests.post(
            f"{base_url}/api/extract",
            files={"marksheet": ("pixel.png", PNG_BYTES, "image/png")},
            timeout=120,
        )
        print(f"Status Code: {r.status_code}")
        print(f"Response Body: {r.text}")
        if r.status_code == 200:
            print("[SUCCESS] Extraction endpoint relayed the file!")
        elif r.status_code == 502:
            print("[FAILURE] n8n answered with an error. Is the workflow ACTIVATED?")
        else:
            print(f"[FAILURE] Unexpected status code: {r.status_code}")
    except Exception as e:
        print(f"[FAIL] POST error: {e}")


if __name__ == "__main__":
    run_check(sys.argv[1] if len(sys.argv) > 1 else BASE_URL)
