import csv, os
from datetime import datetime

COLUMNS = ['timestamp', 'step', 'agent', 'slot', 'x', 'y', 'z',
           'target_x', 'target_y', 'target_z', 'distance', 'magnitude']


class Logger:
    def __init__(self, log_dir, group_id):
        os.makedirs(log_dir, exist_ok=True)
        self.path = os.path.join(log_dir, f"formation_{group_id}.csv")
        self.file = open(self.path, 'w', newline='')
        self.writer = csv.writer(self.file)
        self.writer.writerow(COLUMNS)

    def log(self, row):
        self.writer.writerow(row)
        self.file.flush()

    def log_unit(self, step, agent, unit, reference=None):
        """Steer ``unit`` from its current agent position and log the result."""
        result = unit.steer(reference=reference)
        x, y, z = unit.agent_position
        tx, ty, tz = result.target
        self.log([datetime.now().isoformat(), step, agent, unit.position_in_formation,
                  x, y, z, tx, ty, tz, result.distance, result.magnitude])
        return result

    def log_group(self, step, group):
        return [self.log_unit(step, i, unit) for i, unit in enumerate(group.units)]

    def close(self):
        self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
