"""User account service: aggregate, repositories and a thin HTTP surface."""
