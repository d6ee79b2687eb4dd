"""
BALST Demo - Rotation scenarios, height growth, churn and rebalance cost.

Generates:
- viz/*.png - Individual visualization files
- report.pdf - Comprehensive PDF report
"""

import sys
import time
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.backends.backend_pdf import PdfPages

sys.path.insert(0, str(Path(__file__).parent / "src"))

from balst import BALST

SEED = 42
np.random.seed(SEED)

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

GROWTH_SIZES = [10, 50, 100, 250, 500, 1000]
CHURN_KEY_RANGE = 300
CHURN_STEPS = 1500
TIMING_SIZES = [100, 200, 400, 800]


def avl_height_bound(n):
    return 1.44 * np.log2(n + 2) - 0.33


def example_1_rotation_scenarios():
    """The four three-key insertion orders and the rotation each one needs."""
    print("=" * 60)
    print("Example 1: Rotation Scenarios")
    print("=" * 60)

    scenarios = {
        "left rotation (10, 20, 30)": [10, 20, 30],
        "right rotation (30, 20, 10)": [30, 20, 10],
        "right-left rotation (10, 30, 20)": [10, 30, 20],
        "left-right rotation (30, 10, 20)": [30, 10, 20],
    }

    fig, axes = plt.subplots(1, 4, figsize=(14, 3.5))
    for ax, (name, keys) in zip(axes, scenarios.items()):
        tree: BALST[int, str] = BALST()
        for k in keys:
            tree.insert(k, str(k))

        root = tree.get_key_at_root()
        print(f"\n{name}: root={root}, "
              f"left={tree.get_key_of_left_child_of(root)}, "
              f"right={tree.get_key_of_right_child_of(root)}")
        tree.print()

        ax.text(0.5, 0.95, name, ha="center", va="top", fontsize=9, fontweight="bold")
        ax.text(0.05, 0.8, tree.format(), ha="left", va="top",
                fontfamily="monospace", fontsize=10)
        ax.axis("off")

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_rotations.png", dpi=150)
    plt.close(fig)

    return fig


def example_2_height_growth():
    """Height after ascending inserts vs. the AVL worst-case bound."""
    print("\n" + "=" * 60)
    print("Example 2: Height Growth (ascending inserts)")
    print("=" * 60)

    tree: BALST[int, int] = BALST(rebalance="path")
    heights = []
    n = 0
    for size in GROWTH_SIZES:
        while n < size:
            n += 1
            tree.insert(n, n)
        heights.append(tree.get_height())
        print(f"n={size:5d}  height={heights[-1]:3d}  bound={avl_height_bound(size):6.2f}")

    sizes = np.array(GROWTH_SIZES)
    fig, ax = plt.subplots(figsize=(8, 6))
    ax.plot(sizes, heights, "o-", color="steelblue", linewidth=2, label="BALST height")
    ax.plot(sizes, avl_height_bound(sizes), "r--", linewidth=2, label="1.44 log2(n+2) - 0.33")
    ax.plot(sizes, np.log2(sizes + 1), "g:", linewidth=2, label="log2(n+1)")
    ax.set_xscale("log")
    ax.set_xlabel("Number of keys")
    ax.set_ylabel("Height")
    ax.set_title("Tree Height After Ascending Inserts")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_height_growth.png", dpi=150)
    plt.close(fig)

    return fig, heights


def example_3_random_churn():
    """Random inserts and removes; track size and height at every step."""
    print("\n" + "=" * 60)
    print("Example 3: Random Churn")
    print("=" * 60)

    np.random.seed(SEED)
    tree: BALST[int, int] = BALST(rebalance="path")
    sizes, heights = [], []
    unbalanced = 0
    for k in np.random.randint(0, CHURN_KEY_RANGE, size=CHURN_STEPS).tolist():
        if tree.contains(k):
            tree.remove(k)
        else:
            tree.insert(k, k)
        if not tree.is_balanced():
            unbalanced += 1
        sizes.append(tree.num_keys())
        heights.append(tree.get_height())

    print(f"Steps: {CHURN_STEPS}, final keys: {tree.num_keys()}, final height: {tree.get_height()}")
    print(f"Steps that left the tree unbalanced: {unbalanced}")

    sizes_arr = np.array(sizes)
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    axes[0].plot(sizes_arr, color="steelblue", linewidth=1)
    axes[0].set_xlabel("Step")
    axes[0].set_ylabel("Keys")
    axes[0].set_title("Key Count During Churn")
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(heights, color="steelblue", linewidth=1, label="height")
    axes[1].plot(avl_height_bound(sizes_arr), "r--", linewidth=1, label="AVL bound")
    axes[1].set_xlabel("Step")
    axes[1].set_ylabel("Height")
    axes[1].set_title("Height During Churn")
    axes[1].legend()
    axes[1].grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_churn.png", dpi=150)
    plt.close(fig)

    return fig, unbalanced


def example_4_rebalance_cost():
    """Wall time to build a tree with whole-tree vs. path-only rebalancing."""
    print("\n" + "=" * 60)
    print("Example 4: Full vs. Path Rebalancing")
    print("=" * 60)

    timings = {"full": [], "path": []}
    for size in TIMING_SIZES:
        keys = np.random.permutation(size).tolist()
        for rebalance in ("full", "path"):
            tree: BALST[int, int] = BALST(rebalance=rebalance)
            start = time.perf_counter()
            for k in keys:
                tree.insert(k, k)
            timings[rebalance].append(time.perf_counter() - start)
        print(f"n={size:4d}  full={timings['full'][-1]:.4f}s  path={timings['path'][-1]:.4f}s")

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.plot(TIMING_SIZES, timings["full"], "o-", color="#e74c3c", linewidth=2, label="full")
    ax.plot(TIMING_SIZES, timings["path"], "o-", color="#27ae60", linewidth=2, label="path")
    ax.set_xlabel("Number of inserted keys")
    ax.set_ylabel("Build time (s)")
    ax.set_title("Cost of Rebalancing Strategy")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "04_rebalance_cost.png", dpi=150)
    plt.close(fig)

    return fig, timings


def generate_pdf_report(figures_data):
    """Generate comprehensive PDF report."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    pdf_path = VIZ_DIR.parent / "report.pdf"

    with PdfPages(pdf_path) as pdf:
        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.6, "BALST", fontsize=36, ha="center", fontweight="bold")
        fig.text(0.5, 0.5, "AVL-Backed Ordered Map", fontsize=24, ha="center")
        fig.text(0.5, 0.35, "Demonstration & Analysis Report", fontsize=18, ha="center", style="italic")
        fig.text(0.5, 0.2, f"Seed: {SEED}", fontsize=12, ha="center", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.95, "Summary", fontsize=24, ha="center", fontweight="bold")

        summary_text = """
BALST maps unique ordered keys to values in an AVL tree.

• Rotations:
  - single left / right for same-direction imbalance
  - left-right / right-left for alternating imbalance

• Rebalancing strategies:
  - full: every node re-examined after each insert/remove
  - path: only the nodes on the mutated path

• Checked here:
  - root and children for the four three-key orders
  - height against 1.44 log2(n+2) - 0.33
  - balance after every step of random churn
  - build time of both strategies
"""
        fig.text(0.1, 0.85, summary_text, fontsize=12, ha="left", va="top",
                 fontfamily="monospace", linespacing=1.5)
        pdf.savefig(fig)
        plt.close(fig)

        for title, image in figures_data:
            page = plt.figure(figsize=(11, 8.5))
            page.text(0.5, 0.98, title, fontsize=14, ha="center", fontweight="bold")
            ax = page.add_axes([0.05, 0.05, 0.9, 0.88])
            ax.imshow(plt.imread(VIZ_DIR / image))
            ax.axis("off")
            pdf.savefig(page)
            plt.close(page)

    print(f"PDF report saved to: {pdf_path}")
    return pdf_path


def main():
    print("\n" + "#" * 60)
    print("#" + " " * 24 + "BALST DEMO" + " " * 24 + "#")
    print("#" * 60)
    print(f"\nRandom seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}")

    example_1_rotation_scenarios()
    example_2_height_growth()
    example_3_random_churn()
    example_4_rebalance_cost()

    generate_pdf_report([
        ("Example 1: Rotation Scenarios", "01_rotations.png"),
        ("Example 2: Height Growth", "02_height_growth.png"),
        ("Example 3: Random Churn", "03_churn.png"),
        ("Example 4: Rebalance Cost", "04_rebalance_cost.png"),
    ])

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print(f"\nGenerated files:")
    for f in sorted(VIZ_DIR.glob("*.png")):
        print(f"  - {f.relative_to(VIZ_DIR.parent)}")
    print(f"  - report.pdf")


if __name__ == "__main__":
    main()
