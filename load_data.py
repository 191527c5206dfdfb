import json
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent / "data"

DATA_FILES = {
    "products": "products.json",
    "carts": "carts.json",
    "users": "users.json",
}


def load_json(path):
    """
    Purpose:  Low-level helper that reads and parses a single JSON file from disk.

    No error handling inside → lets the caller deal with FileNotFoundError,
    JSONDecodeError, etc.

    Returns: the deserialized Python object (usually dict or list) from the JSON file
    """
    with open(path, "r", encoding="utf-8") as file:
        return json.load(file)


def load_all_data(data_dir=DATA_DIR):
    """
    Purpose:  Loads the mock API seed files in parallel and returns them as a
              tuple in a fixed order (products, carts, users).

    How it works:
    - one ThreadPoolExecutor worker per file
    - future_map maps each future back to its resource key
    - results are unpacked into a fixed-order tuple regardless of completion order

    Raises: FileNotFoundError, JSONDecodeError, etc. if any file is missing or malformed
    """
    data_dir = Path(data_dir)
    results = {}
    with ThreadPoolExecutor(max_workers=len(DATA_FILES)) as executor:
        future_map = {
            executor.submit(load_json, data_dir / name): key
            for key, name in DATA_FILES.items()
        }
        for fut in as_completed(future_map):
            key = future_map[fut]
            results[key] = fut.result()  # raises if file missing / invalid JSON
    return (
        results["products"],
        results["carts"],
        results["users"],
    )
