import requests
import json
import os
import time

BASE_URL = os.environ.get("VERIFY_BASE_URL", "http://localhost:3000")
UPLOAD_PASSWORD = os.environ.get("UPLOAD_PASSWORD", "")
SLUG = f"verify-post-{int(time.time())}"

def print_response(name, response):
    print(f"--- {name} ---")
    print(f"Status: {response.status_code}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)
    print("\n")

def run_verification():
    # 1. Create with a wrong password (expected 401)
    print("1. Creating post with wrong password...")
    resp = requests.post(f"{BASE_URL}/blogs/", json={
        "slug": SLUG,
        "title": "Verify Post",
        "upload_password": "definitely-wrong"
    })
    print_response("Create (Wrong Password)", resp)

    # 2. Create
    print("2. Creating post...")
    resp = requests.post(f"{BASE_URL}/blogs/", json={
        "slug": SLUG,
        "title": "Verify Post",
        "excerpt": "Created by verify_api.py",
        "content_md": "Hello **world**",
        "status": "published",
        "published_at": "2024-06-01T00:00:00Z",
        "faq_json": '[{"question": "Does it work?", "answer": "Yes"}]',
        "upload_password": UPLOAD_PASSWORD
    })
    print_response("Create", resp)
    if resp.status_code != 201:
        print("Create failed, aborting.")
        return
    blog_id = resp.json()["item"]["id"]

    # 3. List outlines with search
    print("3. Listing outlines...")
    resp = requests.get(f"{BASE_URL}/blogs/", params={"search": "verify", "limit": 5})
    print_response("List Outlines", resp)

    # 4. Fetch by slug
    print("4. Fetching by slug...")
    resp = requests.get(f"{BASE_URL}/blogs/{SLUG}")
    print_response("Get By Slug", resp)

    # 5. Partial update
    print("5. Updating subtitle...")
    resp = requests.put(f"{BASE_URL}/blogs/{blog_id}", json={
        "subtitle": "Updated by verify_api.py",
        "upload_password": UPLOAD_PASSWORD
    })
    print_response("Update", resp)

    # 6. Empty update (expected 400)
    print("6. Updating with no fields (Expected Failure)...")
    resp = requests.put(f"{BASE_URL}/blogs/{blog_id}", json={"upload_password": UPLOAD_PASSWORD})
    print_response("Update (No Fields)", resp)

if __name__ == "__main__":
    run_verification()
