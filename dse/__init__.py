"""Build-time tooling for the Dynamic Script Engine plugin."""
