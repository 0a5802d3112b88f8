"""Road network graph with BFS, Dijkstra and A* route search."""
