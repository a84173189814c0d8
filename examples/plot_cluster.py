"""Draw a kagome cluster grown by bond distance, split into bond-to-site components."""

import matplotlib.pyplot as plt

from latticepy.construction import get_lattice_by_bond_distance
from latticepy.core import bond_to_site_transform, label_connected_components, remove_bonds_by_strength
from latticepy.models import kagome_unitcell


uc = kagome_unitcell(strength="t")
cluster = get_lattice_by_bond_distance(uc, 4)
decorated = bond_to_site_transform(cluster)
remove_bonds_by_strength(decorated, "t")
labels, n_labels = label_connected_components(decorated)

fig, ax = plt.subplots(figsize=(6, 6))
for bond in cluster.connections:
    if bond.from_site < bond.to_site:
        a, b = cluster.positions[bond.from_site], cluster.positions[bond.to_site]
        ax.plot([a[0], b[0]], [a[1], b[1]], color="0.7", lw=1.0, zorder=1)
ax.scatter(decorated.positions[:, 0], decorated.positions[:, 1], c=labels, cmap="tab20", s=18, zorder=2)
ax.set_aspect("equal")
ax.set_title(f"{cluster.n_sites} sites, {n_labels} isolated sites after removing 't' bonds")
plt.tight_layout()
plt.show()
