"""
Action-space wrappers for algorithms that need a Discrete action space
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class MultiBinaryToDiscreteWrapper(gym.ActionWrapper):
    """
    Flattens MultiBinary(n) to Discrete(2**n) for DQN.
    Bit i of the discrete action is button i (up, down, left, right, fire).
    """

    def __init__(self, env):
        super().__init__(env)
        self.n_buttons = int(env.action_space.n)
        self.action_space = spaces.Discrete(2 ** self.n_buttons)

    def action(self, action):
        action = int(action)
        return np.array([(action >> i) & 1 for i in range(self.n_buttons)], dtype=np.int8)
