"""
Configuration for the boss barrage game, its RL environment and training runs
"""

# Environment parameters
ENV_CONFIG = {
    "width": 600,
    "height": 400,
    "dt_ms": 1000 / 60,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_bullets": 8,
    "ambient_chance": 0.0,
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "name": "baseline",
    "description": "Survive first, chip the boss down second",
    "R_SURVIVE": 0.01,   # Per step alive
    "R_HIT": 0.2,        # Per player bullet that lands on the boss
    "R_DEFEAT": 5.0,     # Per boss defeated
    "R_DEATH": 10.0,     # Penalty when hit by a boss bullet
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
    "gamma": 0.99,
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
    "gamma": 0.99,
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
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
