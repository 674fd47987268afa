#!/usr/bin/env python3
"""
Complete Pipeline Demo: Schema → Structural Model → Python module → Analysis

Shows the full workflow:
1. Build the example block schema
2. Analyze the schema
3. Build the structural model
4. Generate (and save) the Python module
"""

from blockgen.analyzer import analyze_schema, format_report
from blockgen.backends import generate_python, save_python_file
from blockgen.builder import build_structural_model
from blockgen.examples import build_example_schema
from blockgen.serialization import schema_to_json


def main():
    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: Schema → Model → Python → Analysis")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Build schema
    # =========================================================================
    print("\n1. BUILDING SCHEMA...")
    schema = build_example_schema()
    with open("example_blocks.json", "w", encoding="utf-8") as f:
        f.write(schema_to_json(schema))
    print(f"   ✓ Schema: {schema.name}")
    print(f"   ✓ Blocks: {len(schema.blocks)}")
    print("   ✓ Saved example_blocks.json")

    # =========================================================================
    # STEP 2: Analyze schema
    # =========================================================================
    print("\n2. ANALYZING SCHEMA...")
    report = analyze_schema(schema)
    for line in format_report(report).split("\n"):
        print(f"   {line}")

    # =========================================================================
    # STEP 3: Structural model
    # =========================================================================
    print("\n3. BUILDING STRUCTURAL MODEL...")
    model = build_structural_model(schema)
    print(f"   ✓ Variants: {len(model.variants)}")
    print(f"   ✓ Custom enumerations: {[e.name for e in model.custom_enums]}")
    print(f"   ✓ Well-known enumerations: {[e.name for e in model.well_known_enums]}")

    # =========================================================================
    # STEP 4: Generate module
    # =========================================================================
    print("\n4. GENERATING PYTHON...")
    save_python_file(model, "example_blocks.py")
    print("   ✓ Saved example_blocks.py")

    source = generate_python(model)
    start = source.index("class OakStairsData")
    lines = source[start:].split("\n")
    for line in lines[:20]:
        print(f"   {line}")
    print(f"   ... ({len(lines) - 20} more lines)")

    print("\n" + "=" * 80)
    print("PIPELINE COMPLETE!")
    print("\nTo format and use the module:")
    print("  black -q example_blocks.py")
    print("  python -c \"import example_blocks as b; print(b.OakStairs.from_string_map({}))\"")
    print("=" * 80)


if __name__ == "__main__":
    main()
