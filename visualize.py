import os, argparse
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import imageio

from antsystem import TSPInstance, ACOConfig, AntSystem
from antsystem.log import get_logger


def visualize(inst, cfg, outdir, step=5):
    os.makedirs(outdir, exist_ok=True)
    solver = AntSystem(inst.distance_matrix(), cfg)
    _ = solver.run()

    coords = inst.coords
    cx = [c[0] for c in coords]
    cy = [c[1] for c in coords]
    frames = []
    for it in range(0, len(solver.history_best_tours), step):
        # tours are closed, so the last point is the start again
        tour = solver.history_best_tours[it]
        L = solver.history_best_lengths[it]
        xs = [coords[i][0] for i in tour]
        ys = [coords[i][1] for i in tour]

        plt.figure(figsize=(5, 5))
        plt.plot(cx, cy, "o")
        plt.plot(xs, ys, "-")
        plt.title(f"AS best-so-far\niter={it+1}  length={L}")
        plt.axis("equal")
        plt.tight_layout()
        frame_path = os.path.join(outdir, f"AS_frame_{it:03d}.png")
        plt.savefig(frame_path, dpi=120, bbox_inches="tight")
        plt.close()
        frames.append(frame_path)

    gif_path = os.path.join(outdir, "AS_convergence.gif")
    with imageio.get_writer(gif_path, mode="I", duration=0.6) as writer:
        for fp in frames:
            writer.append_data(imageio.v2.imread(fp))
    return gif_path


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--file", default=None, help="city file; random cities when omitted")
    p.add_argument("--n", type=int, default=50, help="number of random cities")
    p.add_argument("--iters", type=int, default=120)
    p.add_argument("--ants", type=int, default=25)
    p.add_argument("--square", type=int, default=100)
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--outdir", default="viz")
    p.add_argument("--step", type=int, default=5, help="frame every k iterations")
    args = p.parse_args()

    logger = get_logger("antsystem")
    if args.file:
        inst = TSPInstance.from_file(args.file)
    else:
        inst = TSPInstance.random_euclidean(n=args.n, seed=args.seed, square_size=args.square, name=f"viz{args.n}")
    cfg = ACOConfig(alpha=1.0, beta=3.0, rho=0.5, n_ants=args.ants, n_iterations=args.iters, seed=args.seed)
    gif_path = visualize(inst, cfg, args.outdir, step=args.step)
    logger.info("Saved: %s", gif_path)


if __name__ == "__main__":
    main()
