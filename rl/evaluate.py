"""
Evaluation script for trained agents (and a random-policy baseline)
"""

import argparse
import time
from typing import Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.raider import RaiderEnv
from rl.configs.raider_config import ENV_CONFIG, REWARD_CONFIG
from rl.wrappers import MultiBinaryToDiscreteWrapper


def _summarize(title: str, rewards, lengths, scores):
    print("\n" + "=" * 50)
    print(f"{title} ({len(rewards)} episodes):")
    print(f"Mean Reward: {np.mean(rewards):.2f} ± {np.std(rewards):.2f}")
    print(f"Mean Score: {np.mean(scores):.1f}  (min {np.min(scores)}, max {np.max(scores)})")
    print(f"Mean Episode Length: {np.mean(lengths):.1f}")
    print("=" * 50)
    return {
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_score": float(np.mean(scores)),
        "mean_length": float(np.mean(lengths)),
        "episode_rewards": rewards,
        "episode_scores": scores,
    }


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to open the arcade window
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
    """
    if algo == "ppo":
        model = PPO.load(model_path)
    elif algo == "dqn":
        model = DQN.load(model_path)
    else:
        raise ValueError(f"Unknown algorithm: {algo}")

    raider = RaiderEnv(render_mode="human" if render else None, reward_config=REWARD_CONFIG, **ENV_CONFIG)
    env = MultiBinaryToDiscreteWrapper(raider) if algo == "dqn" else raider
    env = DummyVecEnv([lambda: env])
    if seed is not None:
        env.seed(seed)

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    rewards, lengths, scores = [], [], []
    for episode in range(n_episodes):
        obs = env.reset()
        total_reward, steps = 0.0, 0

        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, infos = env.step(action)
            total_reward += float(reward[0])
            steps += 1

            if render and raider._window:
                raider._window.dispatch_events()
                raider._window.on_draw()
                raider._window.flip()
                time.sleep(1 / 60)

            if done[0]:
                break

        score = infos[0].get("score", 0)
        rewards.append(total_reward)
        lengths.append(steps)
        scores.append(score)
        print(f"Episode {episode + 1}/{n_episodes}: Reward = {total_reward:.2f}, "
              f"Score = {score}, Length = {steps}")

    env.close()
    return _summarize("Evaluation Results", rewards, lengths, scores)


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    """Evaluate a random policy baseline"""
    print("Evaluating random policy baseline...")
    env = RaiderEnv(render_mode=None, reward_config=REWARD_CONFIG, **ENV_CONFIG)

    rewards, lengths, scores = [], [], []
    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)
        terminated = truncated = False
        total_reward, steps = 0.0, 0

        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
            total_reward += reward
            steps += 1

        rewards.append(total_reward)
        lengths.append(steps)
        scores.append(info["score"])

    env.close()
    return _summarize("Random Policy Results", rewards, lengths, scores)


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained RL agent")
    parser.add_argument("model_path", type=str, help="Path to the trained model")
    parser.add_argument("--algo", type=str, default="ppo", choices=["ppo", "dqn"],
                        help="Algorithm used to train the model (default: ppo)")
    parser.add_argument("--n-episodes", type=int, default=10, help="Number of evaluation episodes (default: 10)")
    parser.add_argument("--no-render", action="store_true", help="Disable rendering")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--vec-normalize", type=str, default=None,
                        help="Path to VecNormalize stats file (for PPO)")
    parser.add_argument("--compare-random", action="store_true",
                        help="Also evaluate random policy for comparison")

    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.compare_random:
        print("\n")
        random_results = compare_with_random(n_episodes=args.n_episodes, seed=args.seed)
        improvement = results["mean_score"] - random_results["mean_score"]
        print(f"\nScore improvement over random: {improvement:.1f}")


if __name__ == "__main__":
    main()
