"""
End-to-end workflows
"""
from .init_vm import InitVmResult, InitVmWorkflow
from .jenkins import JenkinsResult, JenkinsWorkflow

__all__ = ["InitVmResult", "InitVmWorkflow", "JenkinsResult", "JenkinsWorkflow"]
