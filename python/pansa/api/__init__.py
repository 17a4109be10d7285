"""HTTP surface of the proxy: routes and their dependencies."""
