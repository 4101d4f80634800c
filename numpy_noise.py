#numpy_noise.py

import numpy as np

GRADIENT_VECTORS = np.array([[0, 1], [0, -1], [1, 0], [-1, 0]])
PERMUTATION_SIZE = 256

def make_permutation(seed):
    """Builds the doubled, shuffled permutation table used by perlin_noise_2d."""
    p = np.arange(PERMUTATION_SIZE, dtype=int)
    np.random.RandomState(seed).shuffle(p)
    return np.stack([p, p]).flatten()

def perlin_noise_2d(p, x, y, octaves=1, persistence=0.5, lacunarity=2.0):
    """
    Generate 2D Perlin noise using a pre-computed permutation table.

    Args:
        p: The pre-shuffled permutation table from make_permutation.
        x, y: numpy arrays of the same shape holding non-negative coordinates.
        octaves: Number of layers summed together.
        persistence: Amplitude multiplier between octaves.
        lacunarity: Frequency multiplier between octaves.
    """
    total_noise = np.zeros(np.shape(x))
    amplitude = 1.0

    for _ in range(octaves):
        xi = np.floor(x).astype(int)
        yi = np.floor(y).astype(int)
        xf = x - xi
        yf = y - yi
        u = fade(xf)
        v = fade(yf)

        px0 = xi % PERMUTATION_SIZE
        px1 = (px0 + 1) % PERMUTATION_SIZE
        py0 = yi % PERMUTATION_SIZE
        py1 = (py0 + 1) % PERMUTATION_SIZE

        g00 = gradient(p[p[px0] + py0], xf, yf)
        g01 = gradient(p[p[px0] + py1], xf, yf - 1)
        g10 = gradient(p[p[px1] + py0], xf - 1, yf)
        g11 = gradient(p[p[px1] + py1], xf - 1, yf - 1)

        x1 = lerp(g00, g10, u)
        x2 = lerp(g01, g11, u)
        total_noise += lerp(x1, x2, v) * amplitude

        amplitude *= persistence
        x, y = x * lacunarity, y * lacunarity

    return total_noise

def layered_noise(p, xs, ys, scale, offset=0.0, octaves=1, persistence=0.5, lacunarity=2.0):
    """
    Samples noise on a grid of tile coordinates and normalizes it to [0, 1].
    The offset shifts the sample window so several layers can share one table.
    """
    raw = perlin_noise_2d(p, xs / scale + offset, ys / scale + offset,
                          octaves=octaves, persistence=persistence, lacunarity=lacunarity)
    return np.clip((raw + 1) / 2, 0.0, 1.0)

def lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)

def fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

def gradient(h, x, y):
    """Grad converts h to the right gradient vector and return the dot product with (x,y)"""
    g = GRADIENT_VECTORS[h % 4]
    return g[..., 0] * x + g[..., 1] * y
