"""Example usage of the jsonkit diff engine and schema validator."""

import json
from jsonkit import DiffConfig, DiffEngine, SchemaValidator, changed_paths, format_value

# Schema for an invoice document
schema = {
    "type": "object",
    "required": ["id", "total", "status", "lineItems"],
    "additionalProperties": False,
    "properties": {
        "id": {"type": "string", "pattern": "^INV-[0-9]{3}$"},
        "total": {"type": "number", "minimum": 0, "multipleOf": 0.5},
        "status": {"type": "string", "enum": ["paid", "pending"]},
        "contact": {"type": "string", "format": "email"},
        "createdAt": {"type": "string", "format": "date-time"},
        "updatedAt": {"type": "string", "format": "date-time"},
        "lineItems": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["sku", "quantity"],
                "properties": {
                    "sku": {"type": "string", "minLength": 3},
                    "quantity": {"type": "integer", "minimum": 1}
                }
            }
        }
    }
}

# Baseline document
old_invoice = {
    "id": "INV-001",
    "total": 100.0,
    "status": "pending",
    "contact": "billing@example.com",
    "createdAt": "2025-02-02T10:30:00Z",
    "updatedAt": "2025-02-02T11:00:00Z",
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 5},
        {"sku": "GADGET-002", "quantity": 2}
    ]
}

# Edited document
new_invoice = {
    "id": "INV-001",
    "total": 112.5,
    "status": "paid",
    "contact": "billing@example.com",
    "createdAt": "2025-02-02T10:30:00Z",
    "updatedAt": "2025-02-03T09:15:00Z",
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 6},
        {"sku": "GADGET-002", "quantity": 2},
        {"sku": "GIZMO-003", "quantity": 1}
    ]
}


def print_change(change, indent=1):
    pad = "  " * indent
    print(f"{pad}- [{change.kind.value}] {change.path}")
    if change.has_old:
        print(f"{pad}  Old: {format_value(change.old_value)}")
    if change.has_new:
        print(f"{pad}  New: {format_value(change.new_value)}")
    for child in change.children or []:
        print_change(child, indent + 1)


def main():
    print("=" * 60)
    print("jsonkit - Example")
    print("=" * 60)

    engine = DiffEngine()
    report = engine.report(old_invoice, new_invoice)

    print(f"\nIdentical: {report.is_identical}")
    print(f"\nSummary:")
    print(f"  Added: {report.summary.added}")
    print(f"  Removed: {report.summary.removed}")
    print(f"  Modified: {report.summary.modified}")

    if report.changes:
        print(f"\nChanges:")
        for change in report.changes:
            print_change(change)

    print(f"\nChanged paths: {changed_paths(report.changes)}")

    print("\n" + "-" * 60)
    print("Full JSON Report:")
    print(json.dumps(report.to_dict(), indent=2))


def example_with_ignored_paths():
    """Example that drops timestamp noise from the change set."""
    print("\n" + "=" * 60)
    print("Example with Ignored Paths")
    print("=" * 60)

    engine = DiffEngine(DiffConfig(ignore_paths=["$..updatedAt"]))
    for change in engine.compare(old_invoice, new_invoice):
        print_change(change)


def example_with_validation():
    """Example that validates a broken edit against the schema."""
    print("\n" + "=" * 60)
    print("Example with Validation")
    print("=" * 60)

    broken = dict(new_invoice, total=-3.2, status="void", note="free text")
    broken["lineItems"] = [{"sku": "X", "quantity": 0}]

    validator = SchemaValidator()
    result = validator.validate(broken, schema)

    print(f"\nValid: {result.valid}")
    for error in result.errors:
        print(f"  - {error.path}: {error.message} ({error.schema_path})")


if __name__ == "__main__":
    main()
    example_with_ignored_paths()
    example_with_validation()
