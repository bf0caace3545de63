"""Platform implementations for the sprite pipeline.

This package contains self-contained platform modules that provide
candidate sources for each operating mode (host build asset sets,
filesystem scans and watchers).

Each platform module auto-registers itself with the PipelineRegistry
when imported.
"""

# Platform modules are imported dynamically by PipelineRegistry.discover_platforms()
# so that every mode registers itself before the first pipeline is created
