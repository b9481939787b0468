import os
import yaml
import logging
from typing import Dict
from models.icon_service import IconService

RULES_DIR = os.path.dirname(os.path.abspath(__file__))

def load_icon_services(rules_dir: str = RULES_DIR) -> Dict[str, IconService]:
    """
    Loads icon-service URL templates from all .yaml files in a directory.
    """
    logger = logging.getLogger(__name__)
    services: Dict[str, IconService] = {}
    for filename in sorted(os.listdir(rules_dir)):
        if filename.endswith(".yaml") or filename.endswith(".yml"):
            filepath = os.path.join(rules_dir, filename)
            with open(filepath, "r") as f:
                services_data = yaml.safe_load(f)
                if not services_data:
                    continue

                for service_data in services_data:
                    # Basic validation
                    if not all(k in service_data for k in ["name", "template"]):
                        logger.warning(f"Skipping invalid icon service in {filename}: {service_data}")
                        continue
                    if "{server}" not in service_data["template"]:
                        logger.warning(f"Skipping icon service without {{server}} placeholder in {filename}: {service_data['name']}")
                        continue

                    services[service_data["name"]] = IconService(
                        name=service_data["name"],
                        template=service_data["template"],
                        description=service_data.get("description"),
                    )
    return services
