"""
ARM template expression helpers.

Pure string formatting for template-language expressions. Nothing here
evaluates an expression; values are emitted verbatim into the template.
"""

from __future__ import annotations

from typing import Iterable, List

MASTER_VM_API_VERSION = "2017-03-30"
ROLE_ASSIGNMENT_RESOURCE_TYPE = "Microsoft.Network/virtualNetworks/providers/roleAssignments"


def quote(value: str) -> str:
    return f"'{value}'"


def bracket(expression: str) -> str:
    """Wrap an expression so the deployment engine evaluates it."""
    return f"[{expression}]"


def call(function: str, *args: str) -> str:
    return f"{function}({', '.join(args)})"


def variables(name: str) -> str:
    return call("variables", quote(name))


def variable_ref(name: str) -> str:
    return bracket(variables(name))


def concat(*args: str) -> str:
    return call("concat", *args)


def create_array(items: Iterable[str]) -> str:
    return call("createArray", *items)


def reference(*args: str) -> str:
    return call("reference", *args)


def resource_id(*args: str) -> str:
    return call("resourceId", *args)


def guid_of(seed: str) -> str:
    return call("guid", call("uniqueString", seed))


def master_vm_principal_id(master_index: int) -> str:
    """principalId of the system-assigned identity of master VM `master_index`."""
    vm_id = resource_id(
        "resourceGroup().name",
        quote("Microsoft.Compute/virtualMachines"),
        concat(variables("masterVMNamePrefix"), str(master_index)),
    )
    return (
        reference(vm_id, quote(MASTER_VM_API_VERSION), quote("Full"))
        + ".identity.principalId"
    )


def master_role_assignment_id(pool_name: str, master_index: int) -> str:
    """Id of the role assignment granting master `master_index` access to the pool vnet.

    Built inline because reference() is not allowed inside template variables.
    """
    return resource_id(
        variables(f"{pool_name}SubnetResourceGroup"),
        quote(ROLE_ASSIGNMENT_RESOURCE_TYPE),
        variables(f"{pool_name}Vnet"),
        quote("Microsoft.Authorization"),
        guid_of(master_vm_principal_id(master_index)),
    )


class ConcatExpression:
    """Ordered concat() builder that drops absent terms.

    Terms render in the order they were appended. An empty array term is
    never emitted, so the result has no `createArray()` and no stray commas.
    """

    def __init__(self, base: str) -> None:
        self._terms: List[str] = [base]

    def append_array(self, items: Iterable[str]) -> "ConcatExpression":
        items = list(items)
        if items:
            self._terms.append(create_array(items))
        return self

    @property
    def terms(self) -> List[str]:
        return list(self._terms)

    def render(self) -> str:
        return bracket(concat(*self._terms))
