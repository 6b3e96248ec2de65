#!/usr/bin/env python3
"""Command-line demo: build a cube-sphere, scatter obstacles, route across it."""

import argparse
import logging
import os
import time
from dataclasses import replace
from typing import List, Optional

from .config import DemoConfig, ScenarioConfig, PRESETS
from .data.mock_generator import CubeSphereGenerator
from .grid.nav_graph import NavGraph
from .output.renderer import PolylineRenderer
from .output.serializer import RouteSerializer, ScenarioData
from .routing.astar import AStarRouter
from .routing.path_smoother import PathSmoother, compute_path_length

DEFAULT_REPORT_NAME = "cube_routes.json"


def print_header(text: str) -> None:
    """Print a section header."""
    print()
    print("=" * 60)
    print(f"  {text}")
    print("=" * 60)


def print_step(text: str) -> None:
    """Print a step indicator."""
    print(f"\n>> {text}")


def build_scene(config: DemoConfig) -> NavGraph:
    """
    Generate the cube-sphere mesh, build the graph and place obstacles.

    Scenario endpoints are always left walkable.
    """
    print_step("Generating cube-sphere mesh...")
    generator = CubeSphereGenerator(
        config.mesh.grid_size,
        radius=config.mesh.radius,
        spherify=config.mesh.spherify,
        seed=config.random_seed,
    )
    mesh = generator.generate_mesh()
    print(f"   Mesh: {len(mesh.vertices)} vertices, {mesh.triangle_count} triangles")

    print_step("Building navigation graph...")
    start_time = time.time()
    graph = NavGraph.from_mesh(mesh, config.mesh.grid_size)
    elapsed = time.time() - start_time
    print(f"   Graph: {graph.total_nodes} nodes in {elapsed:.2f}s")

    print_step(f"Placing obstacles ({config.obstacles.fraction:.0%})...")
    keep = []
    for scenario in config.scenarios:
        keep.extend([scenario.start_cell(), scenario.end_cell()])
    blocked = generator.generate_obstacles(graph, config.obstacles.fraction, keep_walkable=keep)
    print(f"   Blocked {len(blocked)} cells, {graph.walkable_node_count} walkable")

    return graph


def run_scenario(
    scenario: ScenarioConfig,
    router: AStarRouter,
    renderer: PolylineRenderer,
    serializer: RouteSerializer
) -> ScenarioData:
    """Route one scenario and serialize the outcome, successful or not."""
    name = scenario.name or "scenario"
    print(f"\n   [{name}] {scenario.start} -> {scenario.end}")

    result = router.find_path_between(scenario.start_cell(), scenario.end_cell())

    smoothed = None
    if result.success:
        renderer.render(result.path)
        smoothed = renderer.last
        print(f"   [{name}] {len(result.path)} nodes, cost {result.total_cost}, "
              f"{result.nodes_explored} explored, "
              f"world length {compute_path_length(smoothed):.3f}")
    else:
        print(f"   [{name}] {result.status.value.upper()} after {result.nodes_explored} expansions")

    route = serializer.serialize_path_result(result, smoothed)
    return serializer.serialize_scenario(name, scenario.start, scenario.end, route)


def resolve_output_path(config: DemoConfig, output: Optional[str] = None) -> str:
    """Explicit output path, or the default report file inside config.output_dir."""
    if output:
        return output
    return os.path.join(config.output_dir, DEFAULT_REPORT_NAME)


def run_all_scenarios(config: DemoConfig, output_path: str) -> None:
    """Run all scenarios and save output."""
    graph = build_scene(config)

    router = AStarRouter(graph, max_expansions=config.routing.max_expansions)
    surface_radius = config.mesh.radius if config.mesh.spherify else None
    smoother = PathSmoother(
        points_per_segment=config.routing.path_smoothing_points,
        surface_radius=surface_radius,
    )
    renderer = PolylineRenderer(smoother)
    serializer = RouteSerializer()

    print_step(f"Processing {len(config.scenarios)} scenarios...")
    scenarios: List[ScenarioData] = [
        run_scenario(s, router, renderer, serializer) for s in config.scenarios
    ]

    print_step("Saving output...")
    output = serializer.create_demo_output(graph, config.mesh.radius, scenarios)
    serializer.save_json(output, output_path)
    file_size = os.path.getsize(output_path)
    print(f"   Saved: {output_path} ({file_size:,} bytes)")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Cube-Sphere Navigation Demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:

  Run the default demo:
    python -m cubenav.main --preset demo --output routes.json

  Larger grid, more obstacles:
    python -m cubenav.main --grid-size 24 --obstacles 0.25 --seed 7

Presets: demo, small, large
        """
    )

    parser.add_argument(
        "--preset",
        choices=list(PRESETS.keys()),
        default="demo",
        help="Configuration preset (default: demo)"
    )

    parser.add_argument(
        "--grid-size",
        type=int,
        help="Cells per face edge (overrides preset)"
    )

    parser.add_argument(
        "--obstacles",
        type=float,
        help="Fraction of cells to block (overrides preset)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (overrides preset)"
    )

    parser.add_argument(
        "--output",
        help="Output JSON file (default: <output_dir>/cube_routes.json from the preset)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    # Get configuration; changing the grid size regenerates default scenarios
    config = PRESETS[args.preset]
    try:
        if args.grid_size is not None:
            config = replace(config, mesh=replace(config.mesh, grid_size=args.grid_size), scenarios=[])
        if args.obstacles is not None:
            config = replace(config, obstacles=replace(config.obstacles, fraction=args.obstacles))
        if args.seed is not None:
            config = replace(config, random_seed=args.seed)
    except ValueError as e:
        parser.error(str(e))

    print_header("Cube-Sphere Navigation")
    print(f"Preset: {args.preset}")
    print(f"Grid: 6x{config.mesh.grid_size}x{config.mesh.grid_size}, seed {config.random_seed}")

    start_time = time.time()

    print_header("Running Pathfinding")
    run_all_scenarios(config, resolve_output_path(config, args.output))

    elapsed = time.time() - start_time
    print_header("Complete")
    print(f"Total time: {elapsed:.2f}s")


if __name__ == "__main__":
    main()
