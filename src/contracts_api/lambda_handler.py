"""Lambda handler for the Contracts API using Mangum."""
from mangum import Mangum

from contracts_api.main import create_app

app = create_app()

handler = Mangum(app, lifespan="off")

# Export handler for Lambda runtime
lambda_handler = handler
