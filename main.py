# main.py
"""
Main entry point for the flow field renderer.

This script orchestrates a single render:
1. Loads configuration from `config.json` (or the path given as the
   first command line argument).
2. Initializes the logging system.
3. Builds the flow field and particles.
4. Runs the draw loop onto a Pygame canvas.
5. Saves and/or previews the result, then shuts down.
"""
import logging
import sys
import cProfile
import pstats
import io
from utils import setup_logging, load_config
from errors import ConfigurationError
from constants import DEFAULT_WIDTH, DEFAULT_HEIGHT

def main():
    """
    The main function to run the renderer.
    """
    config_path = sys.argv[1] if len(sys.argv) > 1 else 'config.json'

    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return 1

    setup_logging(config)

    logging.info("--- Flow Field Render Starting ---")

    flow_params = config.get('flow_parameters', {})
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from renderer import Renderer
    from visualization import Visualizer

    width = vis_params.get('width', DEFAULT_WIDTH)
    height = vis_params.get('height', DEFAULT_HEIGHT)

    # Validate before opening a window, so a bad config never touches
    # the canvas.
    try:
        renderer = Renderer(flow_params, width, height, log_throttle=run_params.get('log_throttle_steps', 10))
    except ConfigurationError:
        return 1

    visualizer = Visualizer(
        width,
        height,
        background_color=vis_params.get('background_color'),
        show_window=vis_params.get('show_window', True)
    )

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    if profiler:
        profiler.enable()
    renderer.render(visualizer.surface)
    if profiler:
        profiler.disable()

    output_path = vis_params.get('output_path')
    if output_path:
        visualizer.save(output_path)

    visualizer.show()
    visualizer.close()

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info(f"--- Flow Field Render Finished (seed {renderer.seed!r}) ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
