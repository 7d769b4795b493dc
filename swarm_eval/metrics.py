import pandas as pd
import numpy as np


def load(path):
    return pd.read_csv(path)


def mean_slot_error(df, step=None):
    """Mean distance to the assigned slot, over the whole log or one step."""
    if step is not None:
        df = df[df['step'] == step]
    return float(df['distance'].mean())


def arrival_rate(df, radius=0.5):
    """Fraction of agents within ``radius`` of their slot at the last step."""
    last = df[df['step'] == df['step'].max()]
    return float((last['distance'] <= radius).mean())


def convergence_step(df, radius=0.5):
    """First step at which every agent is within ``radius``, or -1."""
    arrived = df.assign(arrived=df['distance'] <= radius).groupby('step')['arrived'].all()
    converged = arrived[arrived]
    return int(converged.index.min()) if len(converged) else -1


def path_length(df):
    """Distance travelled per agent, summed over consecutive steps."""
    total = 0.0
    for _, track in df.sort_values('step').groupby('agent'):
        xyz = track[['x', 'y', 'z']].to_numpy()
        total += float(np.linalg.norm(np.diff(xyz, axis=0), axis=1).sum())
    return total


def episode_summary(df, radius=0.5):
    return {
        'agents': int(df['agent'].nunique()),
        'mean_slot_error': mean_slot_error(df),
        'final_slot_error': mean_slot_error(df, int(df['step'].max())),
        'arrival_rate': arrival_rate(df, radius),
        'convergence_step': convergence_step(df, radius),
        'path_length': path_length(df),
        'steps': int(df['step'].max()),
    }
