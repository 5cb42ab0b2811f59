"""
example_event_timing.py — Demonstration of the skyorbit Library
=================================================================

Follows a reference low-Earth satellite for part of an orbit and corrects a
handful of photon arrival times from the Crab pulsar to the solar-system
barycentre.
"""

import numpy as np

from skyorbit import (
    EarthOrbit, OrbitElements, JulianDate, SkyDir,
    shapiro_delay, travel_time, tdb_minus_tt, barycentric_offset,
    sun_direction_eci,
)

CRAB = SkyDir(83.633083, 22.014500)


def main(n_events: int = 5):
    print("=" * 70)
    print("  skyorbit — Satellite Orbit & Photon Timing Demo")
    print("=" * 70)

    # ── 1. Orbit ────────────────────────────────────────────────────────
    print("\n1. ORBIT DEFINITION")
    print("-" * 40)
    orbit = EarthOrbit(OrbitElements())
    print(f"  Semi-major axis:  {orbit.semi_major_axis:.1f} km")
    print(f"  Inclination:      {orbit.inclination:.1f}°")
    print(f"  Eccentricity:     {orbit.eccentricity:.4f}")
    print(f"  Period:           {orbit.period * 1440.0:.2f} min")
    print(f"  Nodal period:     {orbit.nodal_period * 1440.0:.2f} min")
    print(f"  Node regression:  {np.rad2deg(orbit.ascending_node_rate):+.3f}°/day")
    print(f"  Perigee advance:  {np.rad2deg(orbit.arg_perigee_rate):+.3f}°/day")

    # ── 2. Positions over one orbit ─────────────────────────────────────
    print("\n2. POSITIONS (mission elapsed time)")
    print("-" * 40)
    t0 = JulianDate.from_gregorian(2008, 8, 1, 0.0)
    met0 = (t0 - orbit.epoch) * 86400.0
    step = orbit.period * 86400.0 / n_events
    for k in range(n_events):
        jd = orbit.date_from_seconds(met0 + k * step)
        r = orbit.position(jd)
        print(f"  {jd.isoformat()}  phase={orbit.phase(jd):.3f}  "
              f"r=[{r[0]:+9.1f}, {r[1]:+9.1f}, {r[2]:+9.1f}] km  "
              f"|r|={np.linalg.norm(r):.1f} km")

    # ── 3. Timing corrections ───────────────────────────────────────────
    print("\n3. CRAB PULSAR ARRIVAL-TIME CORRECTIONS")
    print("-" * 40)
    sun_sep = np.rad2deg(np.arccos(np.clip(np.dot(sun_direction_eci(t0), CRAB.dir), -1, 1)))
    print(f"  Source: {CRAB}  (Sun separation {sun_sep:.1f}°)")
    for k in range(n_events):
        jd = t0 + 30.0 * k
        print(f"  {jd.isoformat()[:10]}  TDB-TT={tdb_minus_tt(jd) * 1e3:+.4f} ms  "
              f"travel={travel_time(jd, CRAB):+9.3f} s  "
              f"Shapiro={shapiro_delay(jd, CRAB) * 1e6:7.3f} μs  "
              f"total={barycentric_offset(jd, CRAB):+9.3f} s")

    print("\n" + "=" * 70)
    print("  Demo complete.")
    print("=" * 70)


if __name__ == "__main__":
    main()
