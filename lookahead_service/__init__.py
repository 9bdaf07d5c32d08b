"""HTTP front end for inspecting uploaded JSON documents."""
