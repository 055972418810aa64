#!/usr/bin/env python3
"""Print the published outputs of a deployed site stack."""

import argparse
import json
import sys
from typing import Any

import boto3  # type: ignore[import-not-found]

from frontend_deploy.config import Config
from frontend_deploy.errors import MissingResolvedValueError
from frontend_deploy.topology import Topology, assemble_topology
from frontend_deploy.topology.exporter import expected_outputs


def get_stack_outputs(
  stack_name: str,
  topology: Topology,
  region: str = "us-east-1",
  cfn_client: Any = None,
) -> dict[str, str]:
  """Read a stack's outputs and check every expected output is present.

  Args:
    stack_name: The CloudFormation stack name (e.g., 'FrontendDeploy-gyuri')
    topology: The site's topology, which decides the expected outputs
    region: AWS region
    cfn_client: CloudFormation client, created from ``region`` when omitted

  Returns:
    Output name to value, in the published order
  """
  cfn = cfn_client or boto3.client("cloudformation", region_name=region)
  stack = cfn.describe_stacks(StackName=stack_name)["Stacks"][0]
  published = {o["OutputKey"]: o["OutputValue"] for o in stack.get("Outputs", [])}

  outputs: dict[str, str] = {}
  for name, entity_id in expected_outputs(topology).items():
    if not published.get(name):
      raise MissingResolvedValueError(entity_id)
    outputs[name] = published[name]
  return outputs


def main() -> None:
  """Main entry point."""
  parser = argparse.ArgumentParser(description="Print the outputs of a deployed static site")
  parser.add_argument(
    "site",
    help="Site name from the configuration file",
  )
  parser.add_argument(
    "--config",
    default="sites.yaml",
    help="Site configuration file (default: sites.yaml)",
  )
  parser.add_argument(
    "--format",
    choices=["env", "json", "export"],
    default="env",
    help="Output format (default: env)",
  )

  args = parser.parse_args()

  try:
    site = Config.from_yaml(args.config).get_site(args.site)
    outputs = get_stack_outputs(site.stack_name, assemble_topology(site), site.region)
  except Exception as e:
    print(f"Error reading stack outputs: {e}", file=sys.stderr)
    sys.exit(1)

  if args.format == "json":
    print(json.dumps(outputs, indent=2))
  elif args.format == "export":
    for key, value in outputs.items():
      print(f"export {key}={value}")
  else:  # env format
    for key, value in outputs.items():
      print(f"{key}={value}")


if __name__ == "__main__":
  main()
