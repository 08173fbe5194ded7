"""
Training configuration for the river raid environment
"""

# Engine parameters (see game.raider.config.EngineConfig for the full list)
ENGINE_CONFIG = {
    "width": 480,
    "height": 800,
    "bank_policy": "clamp",
    "start_lives": 3,
    "invulnerable_ticks": 120,
}

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # rendering during training is far too slow
    "engine_config": ENGINE_CONFIG,
    "max_steps": 3600,  # 60 seconds at 60 ticks/s
    "k_obstacles": 6,
    "m_projectiles": 4,
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "R_SCORE": 0.01,     # Per point of game score
    "R_PICKUP": 0.5,     # Fuel / life / power-up collected
    "R_SHOT": 0.005,     # Small cost per bullet (including escort guns)
    "R_ALIVE": 0.001,    # Per tick survived
    "R_DEATH": 5.0,      # Per life lost
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.995,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.995,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 1_000_000,
    "save_freq": 20_000,
    "eval_freq": 10_000,
    "n_eval_episodes": 5,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
