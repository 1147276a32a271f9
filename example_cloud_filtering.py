#!/usr/bin/env python3
"""
Example: classify a point population by its distance field.

The script builds a synthetic cloud with a distance scalar field made of
measurement noise plus a few outliers, then:

1. fits every registered distribution family to the distances;
2. prints the Chi2 distance and the goodness-of-fit decision of each model;
3. keeps the points lying within the central 99% of the best model.
"""

import logging

import numpy as np

from pysatl_cloudstats import (
    ArrayScalarField,
    ScalarFieldCloud,
    ScalarFieldSource,
    configure_distributions_register,
    test_cloud_with_model,
)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    log = logging.getLogger("example")

    rng = np.random.default_rng(42)
    distances = np.concatenate([np.abs(rng.normal(0.0, 0.02, 5000)), rng.uniform(0.3, 0.5, 25)])

    field = ArrayScalarField("C2C distances", distances)
    cloud = ScalarFieldCloud(field.size(), fields=[field])
    cloud.set_output_scalar_field(field.name)

    register = configure_distributions_register()
    best = None
    for name in register.names():
        distribution = register.create(name)
        fit = distribution.fit(ScalarFieldSource(field))
        if not fit.ok:
            log.info("%s: fit failed (%s)", name, fit.reason)
            continue
        decision = test_cloud_with_model(distribution, cloud, p_trust=0.99, adaptive=True)
        log.info(
            "%s: parameters=%s chi2=%.2f threshold=%.2f accepted=%s",
            name,
            fit.parameters.parameters if fit.parameters else None,
            decision.statistic,
            decision.threshold,
            decision.accepted,
        )
        if best is None or decision.statistic < best[1]:
            best = (distribution, decision.statistic)

    if best is None:
        log.info("No model could be fitted.")
        return

    distribution = best[0]
    low, high = distribution.quantile(np.array([0.005, 0.995]))
    kept = (distances >= low) & (distances <= high)
    log.info(
        "Best model %s keeps %d of %d points in [%.4f, %.4f]",
        distribution.name,
        int(kept.sum()),
        distances.size,
        low,
        high,
    )


if __name__ == "__main__":
    main()
