from .client import ContractManager
from .deploy import deploy_contract, setup_contract, SetupOption
from .validator import validate_config, ensure_valid_config
from .stages import transform_stages, process_stages
