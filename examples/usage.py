"""Walk through the generic resource helpers against a live API.

Reads ``RESTWRAP_API_KEY`` / ``RESTWRAP_BASE_URL`` (or ``./restwrap.json``)
and prints each response to stdout.
"""

from __future__ import annotations

import sys

from restwrap import APIWrapper, RestwrapError
from restwrap.config import resolve_config
from restwrap.output import OutputManager, error, format_response, info, set_output


def main() -> int:
    set_output(OutputManager(verbose="-v" in sys.argv[1:]))

    try:
        config = resolve_config(cache_ttl=300_000)
        with APIWrapper(config) as api:
            info("User:")
            format_response(api.get_resource("123", "/users"))

            info("All users:")
            format_response(
                api.get_all_resources("/users", {"limit": 10, "offset": 0, "status": "active"})
            )

            info("Created user:")
            format_response(
                api.create_resource(
                    {"name": "John Doe", "email": "john@example.com", "role": "user"},
                    "/users",
                )
            )

            info("Updated user:")
            format_response(
                api.update_resource("123", {"name": "John Smith", "status": "verified"}, "/users")
            )

            info("Search results:")
            format_response(api.search_resources("john", "/users/search", {"role": "user"}))

            api.delete_resource("123", "/users")
            info("User deleted successfully")
    except RestwrapError as exc:
        error(f"API Error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
