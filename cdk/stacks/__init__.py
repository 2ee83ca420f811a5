"""CDK stacks for delambda test infrastructure."""
