# --- Centralized config dictionary and getter ---

def get_config():
    return {
        'formation': {
            'size': SIZE,
            'position': POSITION_IN_FORMATION,
            'spacing': SPACING,
            'up_axis': UP_AXIS,
            'box_agents_per_line': BOX_AGENTS_PER_LINE,
            'v_agents_per_line': V_AGENTS_PER_LINE,
        },
        'catch_up': {
            'arrive_radius': ARRIVE_RADIUS,
            'inner_radius': INNER_CATCH_UP_RADIUS,
            'outer_radius': OUTER_CATCH_UP_RADIUS,
            'multiplier': CATCH_UP_MULTIPLIER,
            'mapping': DISTANCE_MAPPING,
        },
        'assignment': {
            'complexity': ASSIGN_COMPLEXITY,
            'cost_scale': COST_SCALE,
        },
        'group': {
            'maximum_size': MAXIMUM_GROUP_SIZE,
            'assign_on_start': ASSIGN_ON_START,
            'auto_discover': AUTO_DISCOVER,
            'auto_size': AUTO_SIZE,
        },
    }

# Formation layout
SIZE = 1                        # agents in the formation
POSITION_IN_FORMATION = 0       # zero-based logical slot
SPACING = 5.0                   # distance between adjacent agents (m)
UP_AXIS = (0.0, 0.0, 0.0)       # zero vector keeps shapes in the XY-plane
BOX_AGENTS_PER_LINE = (3, 3)    # width, height of one box layer
V_AGENTS_PER_LINE = (1, 1)      # wing width, height of the V

# Catch-up radius system
ARRIVE_RADIUS = 0.0             # slow down inside this radius
INNER_CATCH_UP_RADIUS = 0.0     # constant magnitude up to here
OUTER_CATCH_UP_RADIUS = 0.0     # full catch-up acceleration from here
CATCH_UP_MULTIPLIER = 1.0
DISTANCE_MAPPING = "linear"     # constant | linear | quadratic | square_root

# Assignment
ASSIGN_COMPLEXITY = 0.5         # 0 = greedy only, 1 = Hungarian only
COST_SCALE = 1000.0             # float distance -> integer cost

# Group management
MAXIMUM_GROUP_SIZE = 10
ASSIGN_ON_START = True
AUTO_DISCOVER = True
AUTO_SIZE = True

# Orientation
AXIS_EPSILON = 1e-6             # components below this count as zero
