"""Rich, structured console output for playpen.

Usage:
    from playpen.console import logger

    logger.info("Compiling 4 files...")
    logger.success("All files compiled")
    logger.warning("SSR build degraded")
    logger.error("Template failed to compile")

    logger.header("Compile", "demo project")
    logger.compile_results(results)
    logger.code(file.compiled.js, title="App.vue (client)")
"""
from playpen.console.logger import Logger, get_logger

# Module-level singleton for convenient import
logger = get_logger()

__all__ = ["Logger", "get_logger", "logger"]
