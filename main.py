# main.py
"""
Main entry point for the particle network animation.

This script orchestrates the entire lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the Pygame host and starts a ParticleNetwork on its canvas.
4. Runs the frame loop until the window is closed.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config, network_params
import cProfile
import pstats
import io


def main():
    """
    The main function to run the animation.
    """
    # Load configuration from the JSON file first.
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Particle Network Starting ---")

    params = network_params(config)
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from network import ParticleNetwork
    from visualization import PygameHost

    # --- Component Initialization ---
    # 1. The host owns the window, the canvas and the frame timer.
    host = PygameHost(vis_params)

    profiler = cProfile.Profile() if run_params.get('profile', False) else None
    max_frames = run_params.get('max_frames', 0) # 0 runs until the window closes

    network = None
    frame_num = 0
    if profiler:
        profiler.enable()
    try:
        # 2. The network sizes the canvas and runs its first tick on construction.
        network = ParticleNetwork(
            host.canvas, host, params,
            log_throttle_steps=run_params.get('log_throttle_steps', 300)
        )
        while host.run_frame():
            frame_num += 1
            if max_frames and frame_num >= max_frames:
                logging.info(f"Reached max_frames ({max_frames}). Stopping animation.")
                break
    finally:
        if profiler:
            profiler.disable()
        if network is not None:
            network.destroy()
            for name, callback in network.listeners:
                host.canvas.remove_event_listener(name, callback)
        host.close()

    logging.info(f"Frame loop finished after {frame_num} frames.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20) # Print top 20 slowest functions
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Particle Network Shutting Down ---")


if __name__ == "__main__":
    main()
