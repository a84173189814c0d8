"""Plot the honeycomb Bloch bands along G-K-M-G and compare with a periodic supercell."""

import numpy as np
import matplotlib.pyplot as plt

from latticepy import bloch_matrix, get_lattice, get_unitcell, real_space_matrix


uc = get_unitcell("honeycomb", strength=-1.0)
recip = 2.0 * np.pi * np.linalg.inv(uc.lattice_vectors).T

gamma = np.zeros(2)
k_point = (2.0 * recip[0] + recip[1]) / 3.0
m_point = 0.5 * recip[0]
path = [gamma, k_point, m_point, gamma]

ks = []
for start, stop in zip(path[:-1], path[1:]):
    for t in np.linspace(0.0, 1.0, 80, endpoint=False):
        ks.append((1.0 - t) * start + t * stop)
ks.append(gamma)

bands = np.array([np.linalg.eigvalsh(bloch_matrix(uc, k)) for k in ks])

supercell = get_lattice(uc, [-12, -12])
levels = np.linalg.eigvalsh(real_space_matrix(supercell))

fig, (ax_bands, ax_hist) = plt.subplots(1, 2, figsize=(9, 4), gridspec_kw={"width_ratios": [3, 1]})
ax_bands.plot(bands, color="tab:blue")
ax_bands.set_xticks([0, 80, 160, 240])
ax_bands.set_xticklabels([r"$\Gamma$", "K", "M", r"$\Gamma$"])
ax_bands.set_ylabel("E")
ax_bands.grid(alpha=0.3)
ax_hist.hist(levels, bins=60, orientation="horizontal", color="tab:orange")
ax_hist.set_xlabel("count")
fig.suptitle(f"Honeycomb: {supercell.n_sites} supercell sites")
plt.tight_layout()
plt.show()
