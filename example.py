"""Example usage of the treediff comparison engine."""

import json
from treediff import DiffEngine, DiffOptions, format_result

# Application configuration before a deployment
old_config = {
    "database": {
        "host": "localhost",
        "port": 5432,
        "name": "myapp"
    },
    "cache": {
        "enabled": True,
        "ttl": 3600
    },
    "features": {
        "newUI": False,
        "analytics": True
    },
    "regions": ["eu-west", "us-east"]
}

# Same configuration after the deployment
new_config = {
    "database": {
        "host": "prod-db.example.com",
        "port": 5432,
        "name": "myapp_prod",
        "ssl": True
    },
    "cache": {
        "enabled": True,
        "ttl": 7200
    },
    "features": {
        "newUI": True,
        "analytics": True,
        "monitoring": True
    },
    "regions": ["us-east", "eu-west"]
}


def main():
    print("=" * 60)
    print("treediff Comparison Engine - Example")
    print("=" * 60)

    # Create engine with default options
    engine = DiffEngine()
    result = engine.compare(old_config, new_config)

    print(f"\nIdentical: {result.is_identical}")
    print(f"\nSummary:")
    print(f"  Differences: {result.summary.total_differences}")
    print(f"  Added: {result.summary.added}")
    print(f"  Removed: {result.summary.removed}")
    print(f"  Modified: {result.summary.modified}")
    print(f"  Similarity: {result.summary.similarity:.1f}%")
    print(f"  Complexity: {result.summary.complexity}")

    if result.differences:
        print(f"\nDifferences:")
        for diff in result.differences:
            print(f"  - [{diff.type.value}] {diff.path} ({diff.severity.value})")
            print(f"    {diff.description}")

    print("\n" + "-" * 60)
    print("Full JSON Report:")
    print(json.dumps(result.to_dict()["summary"], indent=2))


def example_ignoring_order():
    """Array order no longer matters once ignore_array_order is set."""
    print("\n" + "=" * 60)
    print("Example ignoring array order")
    print("=" * 60)

    engine = DiffEngine(DiffOptions(ignore_array_order=True))
    result = engine.compare(old_config, new_config)

    for diff in result.differences:
        print(f"  - [{diff.type.value}] {diff.path}")


def example_text_report():
    """Render a report for two JSON texts."""
    print("\n" + "=" * 60)
    print("Text report")
    print("=" * 60)

    left = '{"name": "Hello World", "tags": ["a", "b"]}'
    right = '{"name": "hello   world", "tags": ["a", "b", "c"]}'

    engine = DiffEngine(DiffOptions(ignore_case=True, ignore_whitespace=True))
    print(format_result(engine.compare(left, right), "txt"))


if __name__ == "__main__":
    main()
    example_ignoring_order()
    example_text_report()
