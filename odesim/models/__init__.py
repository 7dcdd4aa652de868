"""Model registry: ``model_type`` tag → driver."""

from odesim.models import logistic, projectile, sir

DRIVERS = {
    "SIR": sir.simulate,
    "Logistic": logistic.simulate,
    "Projectile": projectile.simulate,
}

COLUMNS = {
    "SIR": sir.COLUMNS,
    "Logistic": logistic.COLUMNS,
    "Projectile": projectile.COLUMNS,
}
