import matplotlib.pyplot as plt


def plot_region_samples(polygon, points, ax=None):
    if ax is None:
        fig, ax = plt.subplots()

    p = polygon.as_array()
    # lng on x, lat on y; close the ring for drawing
    ax.plot(list(p[:, 1]) + [p[0, 1]], list(p[:, 0]) + [p[0, 0]], "-k")

    if points:
        ax.plot([q.lng for q in points], [q.lat for q in points], "o", color="tab:red")

    ax.set_aspect("equal")
    ax.set_xlabel("longitude")
    ax.set_ylabel("latitude")
    ax.set_title(f"{len(points)} locations")
    return ax
