"""Run a quick search, once through the library and once against the raw endpoint.

Usage:
    python -m mfwsclient.samples.searching [--url URL] [--query TERM]
"""

from __future__ import annotations

import argparse
import logging
from typing import Any, Mapping

import requests

from mfwsclient import MFWSClient

# The online knowledgebase does not require authentication.
DEFAULT_URL = "http://kb.cloudvault.m-files.com"
DEFAULT_QUERY = "mfws"


def use_library(client: MFWSClient, query: str) -> None:
    """Search using the client library."""
    results = client.quick_search(query)

    print(f"There were {len(results.items)} results returned.")
    for object_version in results.items:
        obj_ver = object_version.obj_ver
        print(f"\t{object_version.title}")
        if obj_ver is not None:
            print(f"\t\tType: {obj_ver.type}, ID: {obj_ver.id}")


def use_api_directly(url: str, query: str) -> None:
    """Search by calling the endpoint and parsing the JSON by hand."""
    # requests encodes the query term.
    response = requests.get(f"{url.rstrip('/')}/REST/objects", params={"q": query})
    response.raise_for_status()
    data: Mapping[str, Any] = response.json()

    items: list[Mapping[str, Any]] = list(data.get("Items") or [])
    print(f"There were {len(items)} results returned.")
    for item in items:
        obj_ver = item.get("ObjVer") or {}
        print(f"\t{item.get('Title')}")
        print(f"\t\tType: {obj_ver.get('Type')}, ID: {obj_ver.get('ID')}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--url", default=DEFAULT_URL, help="web service root URL")
    parser.add_argument("--query", default=DEFAULT_QUERY, help="term to search for")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    print("Executing a search using the library.")
    use_library(MFWSClient(args.url), args.query)
    print("Complete.")

    print("Executing a search using the API directly.")
    use_api_directly(args.url, args.query)
    print("Complete.")


if __name__ == "__main__":
    main()
