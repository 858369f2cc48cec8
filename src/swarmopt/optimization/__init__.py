"""
Particle swarm optimization for swarmopt.
"""

from .particle import Particle
from .particle_swarm import ParticleSwarmOptimizer, optimize

__all__ = [
    "Particle",
    "ParticleSwarmOptimizer",
    "optimize",
]
