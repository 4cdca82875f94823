"""
jsonmend demonstration script.
"""

import jsonmend
from jsonmend import PrefixPolicy, RepairConfig, RevivalSettings


def main():
    print("jsonmend - JSON Repair Demo")
    print("=" * 40)

    examples = [
        # Basic unquoted keys
        ('{ test: "this is a test"}', "Unquoted keys"),
        # Single quotes and Python literals
        ("{'name': 'John', 'admin': True, 'manager': None}", "Python dict repr"),
        # Trailing commas
        ('{"items": [1, 2, 3,], "active": true,}', "Trailing commas"),
        # Unquoted values
        ("{name: John, age: 30, active: true}", "Unquoted values"),
        # Apostrophes inside single-quoted strings
        ("{'name': 'O'Brien'}", "Apostrophe"),
        # Complex real-world example
        (
            """
        {
            // generated by the deploy script
            server: {
                host: 'localhost',
                port: 8080,
                ssl: false,
            },
            features: ['auth', 'logging'],
            debug: true,
            message: "Server says \\"Hello world!\\"",
        }
        """,
            "Complex configuration",
        ),
        # Objects separated by newlines only
        ('[\n  {"id": 1}\n  {"id": 2}\n]', "Missing commas"),
        # Stringified payload inside a field
        ('{"extractor_request": "{\'key\': \'value\'}"}', "Embedded JSON string"),
        # Hopeless input
        ("{not json at all", "Unrecoverable"),
    ]

    for i, (json_str, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:  {json_str.strip()}")

        result = jsonmend.repair(json_str)
        if result.success:
            print(f"Output: {jsonmend.minify(json_str)}")
            for fix in result.fixes:
                print(f"        - {fix}")
        else:
            print(f"Error:  {result.errors[0]}")

    # Demonstrate prefix handling
    labelled = '{"log": "Request body: {\'id\': 7}"}'
    print(f"\n{len(examples) + 1}. Labelled payload (wrap vs discard)")
    print(f"Input:  {labelled}")
    print(f"Wrap:   {jsonmend.repair(labelled).data}")
    discard = RepairConfig(revival=RevivalSettings(prefix_policy=PrefixPolicy.DISCARD))
    print(f"Drop:   {jsonmend.repair(labelled, discard).data}")


if __name__ == "__main__":
    main()
