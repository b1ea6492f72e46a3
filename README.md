# ntagcluster

In-memory data containers for neutron-tagging analyses in water Cherenkov
detectors. The package covers PMT hits and hit clusters, Monte Carlo
particles, taggable truth objects (decay electrons, neutron captures and
gammas) and tagging candidates with named features.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

The package has no dependencies outside the standard library. It needs
Python 3.10 or later.

## Modules

- `ntagcluster.geometry` – `Vector3`, a frozen 3-vector with `mag`, `mag2`,
  `perp`, `unit`, `dot`, arithmetic operators and `Vector3.from_sequence`.
- `ntagcluster.cluster` – `Cluster`, a named list-like container with
  `append`, `extend`, `erase`, `clear`, `copy_from`, `project`, `first`,
  `last` and `is_empty`. `OutputTree` records a snapshot of every registered
  branch in its `rows` on each `fill`. `TreeOut` is a mixin that holds an
  optional `OutputTree` and offers `set_tree`, `clear_tree`, `fill_tree` and
  `make_branches`.
- `ntagcluster.pmt_hit` – `PMTHit`, a hit with time `t`, charge `q`, cable
  ID `i`, flag `f`, signal/burst/tag flags `s`, `b`, `n`, time since the
  previous hit on the same cable `dt`, and time-of-flight bookkeeping
  (`set_tof_and_direction`, `unset_tof_and_direction`). Adding or
  subtracting a number gives a time-shifted copy.
- `ntagcluster.pmt_hit_cluster` – `PMTHitCluster`, which keeps only hits
  with a valid inner- or outer-detector cable ID. It handles vertices
  (`set_vertex`, `remove_vertex`), sorting and time slicing (`slice`,
  `slice_range`, `slice_by`, `apply_cut`, `lower_bound_index`,
  `upper_bound_index`), coincidence merging (`append_by_coincidence`), time
  offsets, and hit reduction (`remove_hits`, `remove_bad_channels`,
  `remove_negative_hits`, `remove_large_q_hits`, `apply_deadtime`). Each
  reduction step returns a `HitReductionResult`.
- `ntagcluster.hit_statistics` – `legendre`, the isotropy parameters
  `beta_array`, signal and burst flags, counts and ratios, and quantities
  based on dark rates (`noisy_pmt_count`, `noisy_pmt_ratio`,
  `burst_significance`, `dark_likelihood`).
- `ntagcluster.hit_records` – conversion between clusters and flat records:
  `cluster_from_arrays`, `cluster_from_tq` and `to_tq_record` (with
  `TQRecord`), `to_detector_records` (with `DetectorHitRecord`) and
  `hit_table`.
- `ntagcluster.particle_table` – `particle_name`, `interaction_name`,
  `neut_mode_name`, `g3_to_pdg`, `particle_mass`, and the `G3IntCode` and
  `PDGCode` enums.
- `ntagcluster.particle` – `Particle`, with kinetic `energy`,
  `is_daughter_of` and `add_t0`.
- `ntagcluster.particle_cluster` – `ParticleCluster`, filled from
  `PrimaryVectors` and `SecondaryParticles` by `read_vectors`. It is sorted
  by time, links each particle to its parent (`find_parents`), and provides
  `format_elements` and `rows`.
- `ntagcluster.taggable` – `Taggable` and `TaggableType`.
- `ntagcluster.taggable_cluster` – `TaggableCluster`, built from a sequence
  of particles by `read_particle_cluster`. Capture gammas with the same time
  are merged into one capture. It also provides `tank_dwall`,
  `format_elements` and `rows`.
- `ntagcluster.candidate` – `Candidate`, a map of named float features.
- `ntagcluster.candidate_cluster` – `CandidateCluster`. It gathers
  registered features into per-feature vectors (`register_feature_names`,
  `fill_vector_map`) and prints tables with `format_elements`.

## Example

```python
from ntagcluster.pmt_hit import PMTHit
from ntagcluster.pmt_hit_cluster import PMTHitCluster

hits = PMTHitCluster()
hits.append(PMTHit(1000.0, 2.5, 10, 2))
hits.append(PMTHit(1003.0, 1.0, 11, 2))
hits.append(PMTHit(1500.0, -0.5, 12, 2))

result = hits.remove_negative_hits()
print(result.title, result.n_removed)   # Q < 0 1

window = hits.slice_range(0.0, 990.0, 1010.0)
print(len(window))                       # 2
```

## What the package does not do

- It does not read or write event files. `OutputTree` only collects rows in
  memory, and the `rows` and `hit_table` methods return plain dictionaries.
  Storing the data is left to the caller.
- It has no detector database. PMT positions (`PMTHit.position`), bad
  channels, dark rates and the primary/secondary particle vectors must be
  supplied by the caller. `tank_dwall` uses a fixed cylindrical tank size.
- It provides no command-line program.