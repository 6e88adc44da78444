import logging

import config
from octagon import octagon_from_apothem
from path_planner import PathPlanner, path_length


def main():
    """Plan a path through the default three-octagon scene and print it."""
    logging.basicConfig(level=config.LOG_LEVEL)

    obstacles = [octagon_from_apothem(c, config.OCTAGON_INNER_RADIUS)
                 for c in config.OCTAGON_CENTERS]

    planner = PathPlanner(agent_radius=config.DEFAULT_AGENT_RADIUS)
    path = planner.compute_path(config.START_POINT, config.END_POINT, obstacles)
    graph = planner.graph

    print("Vertices:", len(graph.vertices))
    print("Obstacle edges:", len(graph.obstacle_edges))
    print("Visibility edges:", len(graph.visibility_edges))

    if not path:
        print("No path found")
        return

    print("Path coordinates:", [p.round(2).tolist() for p in path])
    print("Path length:", round(path_length(config.START_POINT, path), 2))


if __name__ == "__main__":
    main()
