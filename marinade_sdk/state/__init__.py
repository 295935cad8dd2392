"""On-chain account layouts of the Marinade program: fees, lists, pool, stake and validator state."""