"""bundlediff end-to-end example: compare two builds.

Builds two small analyzer reports in memory, compares them with a budget
on ``manage-flag.js``, and prints the categorised result.
"""

from __future__ import annotations

from bundlediff import BundleBudget, DiffOptions, compare_reports


def _asset(label: str, size: int) -> dict:
    return {"label": label, "isAsset": True, "statSize": size, "parsedSize": size, "gzipSize": size // 3}


def main() -> None:
    base = [
        _asset("app.fdab93ea16844a2d34ab.js", 94431),
        _asset("vendor.96885f9121bed7076430.js", 677),
        _asset("manage-flag.08d925ff48fb570cfc47.js", 4513),
        _asset("legacy-modal.1588a8fdd7073896e790.js", 1123),
    ]
    head = [
        _asset("app.c0c4cfd91f265f86630f.js", 75134),
        _asset("vendor.96885f9121bed7076430.js", 677),
        _asset("manage-flag.741e6d5a3a2d5b7d0e2a.js", 7884),
        _asset("workflow-builder.9ad198b10aae5b5fe929.js", 6577),
    ]

    options = DiffOptions(
        percent_change_minimum=0.05,
        bundle_budgets=(BundleBudget("manage-flag.js", 10),),
    )
    result = compare_reports(base, head, options)

    print("=== bundlediff demo ===")
    for category, assets in result["diff"]["chunks"].items():
        names = ", ".join(a["name"] for a in assets) or "-"
        print(f"{category:>10}: {names}")
    print()
    print(f"Affects long-term caching: {result['affectsLongTermCaching']}")
    caching = result["caching"]
    print(f"Uncached bytes: {caching['uncachedBytes']} of {caching['totalBytes']}")


if __name__ == "__main__":
    main()
