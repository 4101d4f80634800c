# graphing_manager.py

import matplotlib.pyplot as plt
import logger as log
import constants as C

class GraphingManager:
    """
    Handles the collection of time-series data for a focused plant
    and generates a plot after the simulation ends.
    """
    def __init__(self):
        self.data = {
            'time_days': [],
            'health': [],
            'height': [],
            'root_depth': [],
            'stem_segments': [],
            'roots': [],
            'branches': [],
            'leaves': [],
            'stage': [],
        }
        self.focused_plant_id = None
        log.log("GraphingManager initialized.")

    def set_focused_plant(self, plant_id):
        """
        Sets a new plant to focus on, clearing old data.
        """
        if self.focused_plant_id != plant_id:
            self.focused_plant_id = plant_id
            for key in self.data:
                self.data[key].clear()
            log.log(f"[GraphingManager] Now tracking Plant ID: {plant_id}. All data series cleared.")

    def clear_focus(self):
        """
        Stops tracking a plant. The data is kept for plotting.
        """
        log.log(f"[GraphingManager] Stopped tracking Plant ID: {self.focused_plant_id}. Data will be plotted on exit.")
        self.focused_plant_id = None

    def add_data_point(self, game_time_ms, plant):
        """
        Records a snapshot of the plant at the given game time.
        """
        self.data['time_days'].append(game_time_ms / C.DAY_LENGTH_MS)
        self.data['health'].append(plant.health)
        self.data['height'].append(plant.height)
        self.data['root_depth'].append(plant.root_depth)
        self.data['stem_segments'].append(len(plant.stem))
        self.data['roots'].append(len(plant.roots))
        self.data['branches'].append(len(plant.branches))
        self.data['leaves'].append(len(plant.leaves))
        self.data['stage'].append(plant.stage)

    def has_data(self):
        return len(self.data['time_days']) > 0

    def build_figure(self):
        """
        Builds the two-panel figure from the recorded data: vitals on top, part
        counts and growth stage below. The caller owns the figure and must close it.
        """
        days = self.data['time_days']
        fig, (ax1, ax3) = plt.subplots(2, 1, figsize=(12, 9), sharex=True)

        # --- Plot 1: Health on the left axis, size on the right ---
        ax1.set_title('Focused Plant: Vitals Over Time')
        ax1.set_ylabel('Health', color='tab:red')
        line1, = ax1.plot(days, self.data['health'], color='tab:red', label='Health')
        ax1.tick_params(axis='y', labelcolor='tab:red')
        ax1.set_ylim(0, C.PLANT_MAX_HEALTH * 1.05)
        ax1.grid(True, which='both', linestyle='--', linewidth=0.5)

        ax2 = ax1.twinx()
        ax2.set_ylabel('Tiles')
        line2, = ax2.plot(days, self.data['height'], color='tab:green', label='Height')
        line3, = ax2.plot(days, self.data['root_depth'], color='tab:brown', label='Root Depth')
        ax1.legend(handles=[line1, line2, line3], loc='upper left')

        # --- Plot 2: Part counts on the left axis, stage on the right ---
        ax3.set_title('Focused Plant: Parts Over Time')
        parts = [
            ax3.plot(days, self.data['stem_segments'], label='Stem Segments', color='tab:olive')[0],
            ax3.plot(days, self.data['roots'], label='Roots', color='tab:brown')[0],
            ax3.plot(days, self.data['branches'], label='Branches', color='tab:gray')[0],
            ax3.plot(days, self.data['leaves'], label='Leaves', color='tab:green')[0],
        ]
        ax3.set_xlabel('Time (Simulation Days)')
        ax3.set_ylabel('Count')
        ax3.grid(True, which='both', linestyle='--', linewidth=0.5)

        ax4 = ax3.twinx()
        stage_line, = ax4.step(days, self.data['stage'], where='post', color='tab:purple',
                               linestyle='--', label='Stage')
        ax4.set_yticks(list(C.STAGE_NAMES))
        ax4.set_yticklabels([name.capitalize() for name in C.STAGE_NAMES.values()])
        ax4.set_ylim(C.STAGE_SEED - 0.5, C.STAGE_ADVANCED + 0.5)
        ax4.set_ylabel('Stage', color='tab:purple')
        ax3.legend(handles=parts + [stage_line], loc='upper left')

        fig.tight_layout()
        return fig

    def generate_and_save_graph(self, file_path=C.FOCUS_GRAPH_FILENAME):
        """
        Plots the focused plant's vitals and part counts over time and saves the
        figure. Returns the path written, or None if there was nothing to plot
        or the file could not be saved.
        """
        if not self.has_data():
            log.log("[GraphingManager] No data collected, skipping plot generation.")
            return None

        log.log(f"[GraphingManager] Generating plant plot with {len(self.data['time_days'])} data points...")
        fig = self.build_figure()

        try:
            fig.savefig(file_path)
            log.log(f"[GraphingManager] Plant graph saved to {file_path}")
        except OSError as e:
            log.log(f"[GraphingManager] ERROR: Could not save plant graph. Reason: {e}")
            return None
        finally:
            plt.close(fig)
        return file_path
