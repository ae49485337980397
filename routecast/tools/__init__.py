"""Tool protocols shared by adapters and the planner."""
